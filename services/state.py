from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

@dataclass(frozen=True)
class PantryState:
    inventory: Tuple[Dict[str, Any], ...] = ()
    search_term: str = ""
    form_open: bool = False
    loading: bool = False
    captured_image: Optional[bytes] = field(default=None, repr=False)
    item_to_delete: Optional[str] = None

# Events
@dataclass(frozen=True)
class InventoryLoaded:
    items: Tuple[Dict[str, Any], ...]

@dataclass(frozen=True)
class SearchChanged:
    search_term: str

@dataclass(frozen=True)
class CategorySelected:
    category: str

@dataclass(frozen=True)
class FormOpened:
    pass

@dataclass(frozen=True)
class FormClosed:
    pass

@dataclass(frozen=True)
class FrameCaptured:
    image: bytes = field(repr=False)

@dataclass(frozen=True)
class UploadStarted:
    pass

@dataclass(frozen=True)
class UploadFinished:
    pass

@dataclass(frozen=True)
class DeleteRequested:
    name: str

@dataclass(frozen=True)
class DeleteCancelled:
    pass

@dataclass(frozen=True)
class DeleteCompleted:
    pass

# The quick filter that clears the search term
ALL_CATEGORIES = "All"

def reduce(state: PantryState, event) -> PantryState:
    """Return the state that follows event. Unknown events raise TypeError."""
    if isinstance(event, InventoryLoaded):
        return replace(state, inventory=tuple(event.items))
    if isinstance(event, SearchChanged):
        return replace(state, search_term=event.search_term)
    if isinstance(event, CategorySelected):
        term = "" if event.category == ALL_CATEGORIES else event.category
        return replace(state, search_term=term)
    if isinstance(event, FormOpened):
        return replace(state, form_open=True)
    if isinstance(event, FormClosed):
        return replace(state, form_open=False, captured_image=None, loading=False)
    if isinstance(event, FrameCaptured):
        return replace(state, captured_image=event.image)
    if isinstance(event, UploadStarted):
        return replace(state, loading=True)
    if isinstance(event, UploadFinished):
        return replace(state, loading=False)
    if isinstance(event, DeleteRequested):
        return replace(state, item_to_delete=event.name)
    if isinstance(event, (DeleteCancelled, DeleteCompleted)):
        return replace(state, item_to_delete=None)
    raise TypeError(f"Unknown event: {event!r}")
