import asyncio
import os
import uuid
from urllib.parse import quote

from dotenv import load_dotenv

from database.remote import call_remote
from errors import RemoteOperationError
from logging_config import logger

load_dotenv()

# Blob store settings
IMAGE_STORAGE_DIR = os.getenv("IMAGE_STORAGE_DIR", "uploads/images")
IMAGE_URL_PREFIX = os.getenv("IMAGE_URL_PREFIX", "/images")
IMAGE_KEY_PREFIX = "images/"

def image_key(name: str) -> str:
    return f"{IMAGE_KEY_PREFIX}{name}"

# One file per item name; quoting keeps names like "Meat & Poultry/x" inside the directory
# and an encoded leading dot keeps "." and ".." from naming a directory
def _blob_filename(name: str) -> str:
    filename = quote(name, safe="")
    if filename.startswith("."):
        filename = "%2E" + filename[1:]
    return filename

def _blob_path(name: str) -> str:
    return os.path.join(IMAGE_STORAGE_DIR, _blob_filename(name))

def _write_blob(path: str, data: bytes):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as buffer:
        buffer.write(data)

async def upload_image(name: str, data: bytes) -> str:
    """
    Store image bytes under images/<name>, replacing any previous image.

    Args:
        name: Inventory item name used as the blob key
        data: Raw image bytes

    Returns:
        A URL the stored image can be fetched from
    """
    path = _blob_path(name)
    logger.debug(f"Uploading {len(data)} bytes to {image_key(name)} ({path})")
    await call_remote(asyncio.to_thread(_write_blob, path, data), f"Upload {image_key(name)}")
    return await get_image_url(name)

async def get_image_url(name: str) -> str:
    exists = await call_remote(
        asyncio.to_thread(os.path.exists, _blob_path(name)),
        f"Resolve {image_key(name)}"
    )
    if not exists:
        raise RemoteOperationError(f"No image stored at {image_key(name)}")

    # The token changes on every resolve so a replaced image is not served from cache
    return f"{IMAGE_URL_PREFIX}/{quote(_blob_filename(name), safe='')}?token={uuid.uuid4().hex}"
