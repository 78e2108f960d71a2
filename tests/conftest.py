import asyncio
from types import SimpleNamespace

import numpy as np
import pytest
from fastapi.testclient import TestClient

import database.operations as operations
import database.storage as storage
from main import app
from services.camera import MediaCapture
from services.session import PantrySession, get_session


class FakeInventoryCollection:
    """In-memory stand-in for the Motor inventory collection."""

    def __init__(self):
        self.docs = {}
        self.calls = []

    async def find_one(self, query):
        self.calls.append("find_one")
        doc = self.docs.get(query["_id"])
        return dict(doc) if doc else None

    def find(self, query=None):
        self.calls.append("find")
        docs = [dict(doc) for doc in self.docs.values()]

        async def cursor():
            for doc in docs:
                yield doc

        return cursor()

    async def replace_one(self, query, document, upsert=False):
        self.calls.append("replace_one")
        key = query["_id"]
        if key in self.docs or upsert:
            self.docs[key] = {"_id": key, **document}
        return SimpleNamespace(modified_count=1)

    async def update_one(self, query, update):
        self.calls.append("update_one")
        doc = self.docs.get(query["_id"])
        if doc is None:
            return SimpleNamespace(modified_count=0)
        doc.update(update.get("$set", {}))
        return SimpleNamespace(modified_count=1)

    async def delete_one(self, query):
        self.calls.append("delete_one")
        removed = self.docs.pop(query["_id"], None)
        return SimpleNamespace(deleted_count=1 if removed else 0)

    async def create_index(self, *args, **kwargs):
        return "index"

    def seed(self, name, quantity, unit="kilograms", expiry_date="", category="", image_url=""):
        self.docs[name] = {
            "_id": name,
            "quantity": quantity,
            "unit": unit,
            "expiryDate": expiry_date,
            "category": category,
            "imageUrl": image_url,
        }


class FakeVideoDevice:
    """Mimics the parts of cv2.VideoCapture the camera adapter uses."""

    def __init__(self, index, opened=True, frame_ok=True):
        self.index = index
        self.opened = opened
        self.frame_ok = frame_ok
        self.released = False

    def isOpened(self):
        return self.opened

    def read(self):
        if not self.frame_ok or self.released:
            return False, None
        return True, np.full((16, 16, 3), 127, dtype=np.uint8)

    def release(self):
        self.released = True


class DeviceFactory:
    def __init__(self):
        self.devices = []
        self.opened = True
        self.frame_ok = True

    def __call__(self, index):
        device = FakeVideoDevice(index, opened=self.opened, frame_ok=self.frame_ok)
        self.devices.append(device)
        return device

    @property
    def active(self):
        return [device for device in self.devices if not device.released]


@pytest.fixture
def run():
    return asyncio.run


@pytest.fixture
def collection(monkeypatch):
    fake = FakeInventoryCollection()
    monkeypatch.setattr(operations, "inventory_collection", fake)
    return fake


@pytest.fixture
def image_dir(tmp_path, monkeypatch):
    path = tmp_path / "images"
    monkeypatch.setattr(storage, "IMAGE_STORAGE_DIR", str(path))
    return path


@pytest.fixture
def devices():
    return DeviceFactory()


@pytest.fixture
def camera(devices):
    return MediaCapture(device_index=0, open_device=devices)


@pytest.fixture
def session(collection, image_dir, camera):
    return PantrySession(camera=camera)


@pytest.fixture
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()
