from fastapi import APIRouter, Depends, HTTPException, status

from models.inventory import InventoryViewResponse, SearchUpdate
from services.session import PantrySession, get_session
from services.view import QUICK_FILTERS
from logging_config import logger

router = APIRouter()

def _view(session: PantrySession):
    items = session.visible_items()
    return {
        "search_term": session.state.search_term,
        "items": items,
        "total": len(items),
        "categories": QUICK_FILTERS,
    }

# Current pantry view
@router.get(
    "",
    response_model=InventoryViewResponse,
    summary="Get the pantry view",
    description="""
    Return the in-memory inventory snapshot filtered by the current search term.

    The snapshot is reloaded after every change made through this API; use
    `POST /view/refresh` to pick up changes made elsewhere.
    """
)
async def get_view(session: PantrySession = Depends(get_session)):
    return _view(session)

@router.put(
    "/search",
    response_model=InventoryViewResponse,
    summary="Set the search term"
)
async def set_search(update: SearchUpdate, session: PantrySession = Depends(get_session)):
    session.set_search(update.search_term)
    return _view(session)

@router.post(
    "/category/{category}",
    response_model=InventoryViewResponse,
    summary="Apply a category quick filter",
    description="Set the search term to the category name. `All` clears the search term."
)
async def select_category(category: str, session: PantrySession = Depends(get_session)):
    if category not in QUICK_FILTERS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown category filter: {category}"
        )
    session.select_category(category)
    return _view(session)

@router.post(
    "/refresh",
    response_model=InventoryViewResponse,
    summary="Reload the inventory snapshot"
)
async def refresh_view(session: PantrySession = Depends(get_session)):
    logger.info("Refreshing inventory snapshot")
    await session.refresh()
    return _view(session)
