from fastapi import APIRouter, Depends

from models.session import FormStatus
from services.session import PantrySession, get_session

router = APIRouter()

def _status(session: PantrySession) -> FormStatus:
    return FormStatus(
        open=session.state.form_open,
        loading=session.state.loading,
        has_captured_image=session.state.captured_image is not None,
    )

@router.get("", response_model=FormStatus, summary="Get the add-item form state")
async def get_form(session: PantrySession = Depends(get_session)):
    return _status(session)

@router.post("/open", response_model=FormStatus, summary="Open the add-item form")
async def open_form(session: PantrySession = Depends(get_session)):
    session.open_form()
    return _status(session)

@router.post(
    "/close",
    response_model=FormStatus,
    summary="Close the add-item form",
    description="Close the form, release the camera and discard any captured frame."
)
async def close_form(session: PantrySession = Depends(get_session)):
    await session.close_form()
    return _status(session)
