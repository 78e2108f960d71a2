import asyncio
from typing import Any, Dict, List, Optional

from database.operations import adjust_inventory_quantity, list_inventory, remove_inventory_item
from logging_config import logger
from services.camera import MediaCapture
from services.state import (
    PantryState, reduce, InventoryLoaded, SearchChanged, CategorySelected,
    FormOpened, FormClosed, FrameCaptured, DeleteRequested, DeleteCancelled, DeleteCompleted,
)
from services.view import filter_inventory

class PantrySession:
    """UI state of the single pantry kiosk plus the camera it drives."""

    def __init__(self, camera: MediaCapture = None):
        self.state = PantryState()
        self.camera = camera or MediaCapture()

    def dispatch(self, event) -> PantryState:
        self.state = reduce(self.state, event)
        return self.state

    # Inventory snapshot
    async def refresh(self) -> List[Dict[str, Any]]:
        items = await list_inventory()
        self.dispatch(InventoryLoaded(tuple(items)))
        return items

    def visible_items(self) -> List[Dict[str, Any]]:
        return filter_inventory(self.state.inventory, self.state.search_term)

    def set_search(self, search_term: str):
        self.dispatch(SearchChanged(search_term))

    def select_category(self, category: str):
        self.dispatch(CategorySelected(category))

    async def adjust(self, name: str, delta: float) -> Optional[Dict[str, Any]]:
        result = await adjust_inventory_quantity(name, delta)
        if result is not None:
            await self.refresh()
        return result

    # Add-item form
    def open_form(self):
        self.dispatch(FormOpened())

    async def close_form(self):
        await asyncio.to_thread(self.camera.stop)
        self.camera.discard()
        self.dispatch(FormClosed())

    # Camera
    async def start_camera(self) -> bool:
        return await asyncio.to_thread(self.camera.start)

    async def capture_frame(self) -> bytes:
        image = await asyncio.to_thread(self.camera.capture)
        self.dispatch(FrameCaptured(image))
        return image

    async def stop_camera(self):
        await asyncio.to_thread(self.camera.stop)

    # Delete confirmation
    def request_delete(self, name: str):
        self.dispatch(DeleteRequested(name))

    def cancel_delete(self):
        self.dispatch(DeleteCancelled())

    async def delete(self, name: str) -> bool:
        deleted = await remove_inventory_item(name)
        if self.state.item_to_delete == name:
            self.dispatch(DeleteCompleted())
        await self.refresh()
        logger.info(f"Inventory item {'deleted' if deleted else 'was already absent'}: {name}")
        return deleted

    async def shutdown(self):
        await self.stop_camera()

_session: Optional[PantrySession] = None

def get_session() -> PantrySession:
    global _session
    if _session is None:
        _session = PantrySession()
    return _session
