import asyncio

import pytest
from pymongo.errors import OperationFailure

import database.remote as remote
from database.operations import (
    adjust_inventory_quantity,
    format_quantity,
    get_inventory_item,
    list_inventory,
    normalize_quantity,
    put_inventory_item,
    remove_inventory_item,
)
from errors import RemoteOperationError, RemoteTimeoutError


def test_format_quantity_drops_trailing_zero():
    assert format_quantity(5) == "5"
    assert format_quantity(5.0) == "5"
    assert format_quantity(2.5) == "2.5"
    assert format_quantity("7") == "7"


def test_normalize_quantity_keeps_integers_integral():
    assert isinstance(normalize_quantity(3.0), int)
    assert normalize_quantity(1.25) == 1.25


def test_put_then_get(run, collection):
    run(put_inventory_item("Milk", {"quantity": 2.0, "unit": "liters", "category": "Produce"}))

    assert collection.docs["Milk"] == {
        "_id": "Milk",
        "quantity": 2,
        "unit": "liters",
        "expiryDate": "",
        "category": "Produce",
        "imageUrl": "",
    }
    item = run(get_inventory_item("Milk"))
    assert item["name"] == "Milk"
    assert item["quantity"] == 2
    assert item["image_url"] == ""


def test_get_missing_item_returns_none(run, collection):
    assert run(get_inventory_item("Nothing")) is None


def test_put_overwrites_whole_document(run, collection):
    collection.seed("Rice", 4, unit="pounds", category="Produce", image_url="/images/Rice")
    run(put_inventory_item("Rice", {"quantity": 1, "unit": "kilograms"}))

    assert collection.docs["Rice"]["unit"] == "kilograms"
    assert collection.docs["Rice"]["category"] == ""
    assert collection.docs["Rice"]["imageUrl"] == ""


def test_list_inventory_returns_every_item(run, collection):
    collection.seed("Milk", 1, category="Produce")
    collection.seed("Steak", 2, category="Meat & Poultry")

    items = run(list_inventory())

    assert [item["name"] for item in items] == ["Milk", "Steak"]


def test_adjust_increments_quantity_only(run, collection):
    collection.seed("Eggs", 2, unit="dozen", category="Produce")

    result = run(adjust_inventory_quantity("Eggs", 1))

    assert result == {"name": "Eggs", "quantity": 3, "deleted": False}
    assert collection.docs["Eggs"]["quantity"] == 3
    assert collection.docs["Eggs"]["unit"] == "dozen"


def test_adjust_to_exactly_zero_deletes(run, collection):
    collection.seed("Eggs", 2)

    result = run(adjust_inventory_quantity("Eggs", -2))

    assert result["deleted"] is True
    assert "Eggs" not in collection.docs


def test_adjust_below_zero_deletes_instead_of_storing_negative(run, collection):
    collection.seed("Eggs", 1)

    run(adjust_inventory_quantity("Eggs", -5))

    assert run(get_inventory_item("Eggs")) is None


def test_adjust_missing_item_returns_none(run, collection):
    assert run(adjust_inventory_quantity("Ghost", 1)) is None
    assert collection.docs == {}


def test_remove_reports_whether_anything_was_deleted(run, collection):
    collection.seed("Salt", 1)

    assert run(remove_inventory_item("Salt")) is True
    assert run(remove_inventory_item("Salt")) is False


def test_slow_store_call_times_out(run, collection, monkeypatch):
    async def slow_find_one(query):
        await asyncio.sleep(1)

    monkeypatch.setattr(collection, "find_one", slow_find_one)
    monkeypatch.setattr(remote, "REMOTE_CALL_TIMEOUT", 0.01)

    with pytest.raises(RemoteTimeoutError):
        run(get_inventory_item("Milk"))


def test_store_failure_is_typed(run, collection, monkeypatch):
    async def failing_find_one(query):
        raise OperationFailure("not authorized")

    monkeypatch.setattr(collection, "find_one", failing_find_one)

    with pytest.raises(RemoteOperationError) as excinfo:
        run(get_inventory_item("Milk"))
    assert excinfo.value.recoverable is False
