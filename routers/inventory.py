from fastapi import APIRouter, Depends, HTTPException, status, Query, UploadFile, File, Form
from typing import List, Optional
import traceback

from errors import PantryError, ValidationError
from models.inventory import (
    InventoryItem, QuantityAdjustment, AdjustmentResult, Unit, Category
)
from models.session import DeleteConfirmation
from database.operations import list_inventory, get_inventory_item
from services.session import PantrySession, get_session
from services.upsert import ImageSource, ItemSubmission, submit_item
from services.view import filter_inventory
from logging_config import logger

router = APIRouter()

UNITS = [unit.value for unit in Unit]
CATEGORIES = [category.value for category in Category]

# List inventory items
@router.get(
    "",
    response_model=List[InventoryItem],
    summary="List inventory items",
    description="""
    Read every item in the pantry straight from the document store.

    When `search` is given, only items whose name or category contains it
    (case-insensitive) are returned.
    """,
    response_description="Returns the matching inventory items"
)
async def get_inventory(
    search: str = Query("", description="Substring to match against name or category", example="produce")
):
    try:
        logger.info(f"Listing inventory items, search: '{search}'")
        items = await list_inventory()
        return filter_inventory(items, search)
    except PantryError:
        raise
    except Exception as e:
        logger.error(f"Error listing inventory: {str(e)}")
        logger.error(traceback.format_exc())
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error listing inventory: {str(e)}"
        )

# Add or merge an inventory item
@router.post(
    "",
    response_model=InventoryItem,
    summary="Add inventory item",
    description="""
    Add an item to the pantry, or merge into the item with the same name.

    Adding an existing name adds the submitted quantity to the stored quantity
    and replaces unit, expiry date and category.

    An image can be attached either as an uploaded file or, with
    `use_captured_image`, the frame last captured by the camera. Without a new
    image an existing item keeps its image.
    """,
    response_description="Returns the stored inventory item"
)
async def add_item_to_inventory(
    name: Optional[str] = Form(None, description="Name of the item", example="Milk"),
    quantity: Optional[str] = Form(None, description="Quantity to add", example="2"),
    unit: str = Form(Unit.KILOGRAMS.value, description="One of: " + ", ".join(UNITS), example="liters"),
    expiry_date: str = Form("", description="Expiry date in YYYY-MM-DD format", example="2026-11-01"),
    category: str = Form("", description="One of: " + ", ".join(CATEGORIES), example="Produce"),
    use_captured_image: bool = Form(True, description="Attach the captured camera frame when no file is uploaded"),
    item_image: Optional[UploadFile] = File(None, description="Image of the item"),
    session: PantrySession = Depends(get_session)
):
    try:
        logger.info(f"Adding inventory item: {name}, quantity: {quantity}")

        if unit not in UNITS:
            raise ValidationError(f"Unit must be one of: {', '.join(UNITS)}")
        if category and category not in CATEGORIES:
            raise ValidationError(f"Category must be one of: {', '.join(CATEGORIES)}")

        image = None
        if item_image is not None and item_image.filename:
            try:
                image = ImageSource(
                    data=await item_image.read(),
                    filename=item_image.filename,
                    content_type=item_image.content_type or "",
                )
            finally:
                await item_image.close()

        submission = ItemSubmission(
            name=name,
            quantity=quantity,
            unit=unit,
            expiry_date=expiry_date,
            category=category,
            image=image,
            use_captured_image=use_captured_image,
        )
        return await submit_item(session, submission)
    except PantryError:
        raise
    except Exception as e:
        logger.error(f"Error adding inventory item: {str(e)}")
        logger.error(traceback.format_exc())
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error adding inventory item: {str(e)}"
        )

# Cancel a pending delete confirmation
@router.post(
    "/delete-cancel",
    response_model=DeleteConfirmation,
    summary="Cancel deletion"
)
async def cancel_delete(session: PantrySession = Depends(get_session)):
    session.cancel_delete()
    return DeleteConfirmation()

# Get a single inventory item
@router.get(
    "/{name}",
    response_model=InventoryItem,
    summary="Get inventory item",
    response_description="Returns the inventory item with the given name"
)
async def get_item(name: str):
    item = await get_inventory_item(name)
    if not item:
        logger.warning(f"Inventory item not found: {name}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )
    return item

async def _adjust(session: PantrySession, name: str, delta: float):
    try:
        logger.info(f"Adjusting quantity of {name} by {delta}")
        result = await session.adjust(name, delta)
        if result is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Item not found"
            )
        return result
    except (HTTPException, PantryError):
        raise
    except Exception as e:
        logger.error(f"Error adjusting inventory item: {str(e)}")
        logger.error(traceback.format_exc())
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error adjusting inventory item: {str(e)}"
        )

@router.post(
    "/{name}/increment",
    response_model=AdjustmentResult,
    summary="Increase quantity by one"
)
async def increment_item(name: str, session: PantrySession = Depends(get_session)):
    return await _adjust(session, name, 1)

@router.post(
    "/{name}/decrement",
    response_model=AdjustmentResult,
    summary="Decrease quantity by one",
    description="Decrease the quantity by one. The item is deleted when its quantity reaches zero."
)
async def decrement_item(name: str, session: PantrySession = Depends(get_session)):
    return await _adjust(session, name, -1)

@router.patch(
    "/{name}/quantity",
    response_model=AdjustmentResult,
    summary="Adjust quantity",
    description="Add `delta` to the quantity. The item is deleted when its quantity drops to zero or below."
)
async def adjust_item(
    name: str,
    adjustment: QuantityAdjustment,
    session: PantrySession = Depends(get_session)
):
    return await _adjust(session, name, adjustment.delta)

# Ask for delete confirmation
@router.post(
    "/{name}/delete-request",
    response_model=DeleteConfirmation,
    summary="Request deletion",
    description="Start the delete confirmation for an item. Confirm with `DELETE /inventory/{name}`."
)
async def request_delete(name: str, session: PantrySession = Depends(get_session)):
    session.request_delete(name)
    return DeleteConfirmation(
        pending=name,
        message=f"Are you sure you want to delete {name}?"
    )

@router.delete(
    "/{name}",
    summary="Delete inventory item",
    description="""
    Delete an item. The deletion must be confirmed, either by a prior
    `delete-request` for the same item or by passing `confirm=true`.
    """
)
async def delete_item(
    name: str,
    confirm: bool = Query(False, description="Skip the delete-request step"),
    session: PantrySession = Depends(get_session)
):
    if not confirm and session.state.item_to_delete != name:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Deletion of {name} has not been confirmed"
        )
    try:
        deleted = await session.delete(name)
        return {"name": name, "deleted": deleted}
    except PantryError:
        raise
    except Exception as e:
        logger.error(f"Error deleting inventory item: {str(e)}")
        logger.error(traceback.format_exc())
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error deleting inventory item: {str(e)}"
        )
