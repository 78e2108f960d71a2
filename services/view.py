from typing import Any, Dict, Iterable, List

from models.inventory import Category

QUICK_FILTERS = ["All"] + [category.value for category in Category]

def filter_inventory(items: Iterable[Dict[str, Any]], search_term: str) -> List[Dict[str, Any]]:
    """Case-insensitive substring match against the item name or its category."""
    term = (search_term or "").lower()
    return [
        item for item in items
        if term in item["name"].lower() or term in (item.get("category") or "").lower()
    ]
