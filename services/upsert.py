import math
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from database.operations import format_quantity, get_inventory_item, put_inventory_item
from database.storage import upload_image
from errors import DuplicateSubmissionError, ValidationError
from logging_config import logger
from models.inventory import Unit
from services.session import PantrySession
from services.state import UploadFinished, UploadStarted

load_dotenv()

MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(25 * 1024 * 1024)))
IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "heic", "heif"}

@dataclass
class ImageSource:
    data: bytes = field(repr=False)
    filename: str = ""
    content_type: str = ""

@dataclass
class ItemSubmission:
    name: Optional[str]
    quantity: Optional[str]
    unit: str = Unit.KILOGRAMS.value
    expiry_date: str = ""
    category: str = ""
    image: Optional[ImageSource] = None
    use_captured_image: bool = True

def validate_image(image: ImageSource):
    content_type = (image.content_type or "").strip().lower()
    ext = os.path.splitext(image.filename or "")[1].lower().lstrip(".")
    if content_type and content_type != "application/octet-stream":
        if not content_type.startswith("image/"):
            raise ValidationError("File must be an image")
    elif ext and ext not in IMAGE_EXTENSIONS:
        raise ValidationError("File must be an image")
    if not image.data:
        raise ValidationError("Image file is empty")
    if len(image.data) > MAX_IMAGE_BYTES:
        raise ValidationError(f"Image file is too large (max {MAX_IMAGE_BYTES} bytes)")

def parse_quantity(raw: str) -> float:
    try:
        quantity = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Quantity must be a number, got '{raw}'")
    if not math.isfinite(quantity) or quantity <= 0:
        raise ValidationError("Quantity must be greater than 0")
    return quantity

async def submit_item(session: PantrySession, submission: ItemSubmission) -> Dict[str, Any]:
    """
    Add an item, or merge into the existing item with the same name.

    Re-adding a name adds the submitted quantity to the stored one and replaces
    unit, expiry date and category. A new image (uploaded file first, then the
    frame captured by the camera) replaces the stored image URL; without one
    the previous URL is kept.

    Raises:
        ValidationError: Missing name or quantity, or a bad quantity or image
        DuplicateSubmissionError: The entered quantity equals the stored one
        RemoteOperationError: The document store or blob store failed
    """
    name = (submission.name or "").strip()
    raw_quantity = submission.quantity
    if not name or raw_quantity is None or raw_quantity == "":
        raise ValidationError("Name and Quantity are required!")
    # The name is a single path segment in /inventory/{name}/...
    if "/" in name:
        raise ValidationError("Name must not contain '/'")
    quantity = parse_quantity(raw_quantity)
    if submission.image is not None:
        validate_image(submission.image)

    existing = await get_inventory_item(name)

    # Compares the entered text with the stored value as displayed
    if existing and format_quantity(existing["quantity"]) == raw_quantity:
        logger.warning(f"Rejected duplicate quantity {raw_quantity} for {name}")
        raise DuplicateSubmissionError("This quantity already exists!")

    image_data = None
    if submission.image is not None:
        image_data = submission.image.data
    elif submission.use_captured_image and session.state.captured_image:
        image_data = session.state.captured_image

    image_url = existing["image_url"] if existing else ""
    if image_data:
        session.dispatch(UploadStarted())
        try:
            image_url = await upload_image(name, image_data)
        finally:
            session.dispatch(UploadFinished())

    item_data = {
        "quantity": existing["quantity"] + quantity if existing else quantity,
        "unit": submission.unit,
        "expiry_date": submission.expiry_date or "",
        "category": submission.category or "",
        "image_url": image_url,
    }
    item = await put_inventory_item(name, item_data)
    logger.info(f"Inventory item {'merged' if existing else 'created'}: {name}, quantity {item['quantity']}")

    await session.refresh()
    await session.close_form()
    return item
