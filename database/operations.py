from typing import List, Dict, Any, Optional, Union

from database.db import inventory_collection
from database.remote import call_remote
from logging_config import logger

Number = Union[int, float]

# Helper to store integral quantities as integers
def normalize_quantity(quantity: Number) -> Number:
    quantity = float(quantity)
    if quantity.is_integer():
        return int(quantity)
    return quantity

def format_quantity(quantity: Any) -> str:
    """Render a stored quantity the way it is shown to the user."""
    if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
        return str(normalize_quantity(quantity))
    return str(quantity)

# Helper to convert a stored document to the API shape
def serialize_item(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": doc["_id"],
        "quantity": doc.get("quantity", 0),
        "unit": doc.get("unit", ""),
        "expiry_date": doc.get("expiryDate") or "",
        "category": doc.get("category") or "",
        "image_url": doc.get("imageUrl") or "",
    }

# Helper to convert API-shaped item data to a stored document body
def to_document(item_data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "quantity": normalize_quantity(item_data["quantity"]),
        "unit": item_data.get("unit", ""),
        "expiryDate": item_data.get("expiry_date") or "",
        "category": item_data.get("category") or "",
        "imageUrl": item_data.get("image_url") or "",
    }

# Inventory operations
async def list_inventory() -> List[Dict[str, Any]]:
    """Read the whole collection in server order."""
    async def fetch():
        items = []
        async for doc in inventory_collection.find():
            items.append(serialize_item(doc))
        return items

    items = await call_remote(fetch(), "List inventory")
    logger.debug(f"Loaded {len(items)} inventory items")
    return items

async def get_inventory_item(name: str) -> Optional[Dict[str, Any]]:
    doc = await call_remote(
        inventory_collection.find_one({"_id": name}),
        f"Get inventory item '{name}'"
    )
    if doc:
        return serialize_item(doc)
    return None

async def put_inventory_item(name: str, item_data: Dict[str, Any]) -> Dict[str, Any]:
    """Create or fully replace the document keyed by name."""
    document = to_document(item_data)
    await call_remote(
        inventory_collection.replace_one({"_id": name}, document, upsert=True),
        f"Write inventory item '{name}'"
    )
    logger.debug(f"Inventory item written: {name} -> {document}")
    return serialize_item({"_id": name, **document})

async def adjust_inventory_quantity(name: str, delta: Number) -> Optional[Dict[str, Any]]:
    """
    Add delta to an item's quantity, deleting the item when it reaches zero or below.

    Read-modify-write without a transaction: concurrent adjustments of the
    same item can overwrite each other.

    Returns:
        {"name", "quantity", "deleted"} or None when the item does not exist
    """
    doc = await call_remote(
        inventory_collection.find_one({"_id": name}),
        f"Get inventory item '{name}'"
    )
    if not doc:
        logger.warning(f"Cannot adjust missing inventory item: {name}")
        return None

    new_quantity = normalize_quantity(doc.get("quantity", 0) + delta)
    if new_quantity <= 0:
        await call_remote(
            inventory_collection.delete_one({"_id": name}),
            f"Delete inventory item '{name}'"
        )
        logger.info(f"Inventory item {name} reached {new_quantity} and was removed")
        return {"name": name, "quantity": None, "deleted": True}

    await call_remote(
        inventory_collection.update_one({"_id": name}, {"$set": {"quantity": new_quantity}}),
        f"Update quantity of '{name}'"
    )
    return {"name": name, "quantity": new_quantity, "deleted": False}

async def remove_inventory_item(name: str) -> bool:
    result = await call_remote(
        inventory_collection.delete_one({"_id": name}),
        f"Delete inventory item '{name}'"
    )
    return result.deleted_count > 0
