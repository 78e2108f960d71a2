import pytest

import services.upsert as upsert
from errors import DuplicateSubmissionError, RemoteOperationError, ValidationError
from services.upsert import ImageSource, ItemSubmission, submit_item

JPEG = b"\xff\xd8" + b"\x00" * 200


def submission(name="Milk", quantity="2", **kwargs):
    kwargs.setdefault("unit", "liters")
    kwargs.setdefault("category", "Produce")
    return ItemSubmission(name=name, quantity=quantity, **kwargs)


def test_new_item_stores_submitted_quantity(run, session, collection):
    item = run(submit_item(session, submission(quantity="3")))

    assert item["quantity"] == 3
    assert collection.docs["Milk"]["quantity"] == 3
    assert collection.docs["Milk"]["imageUrl"] == ""


def test_repeat_name_merges_quantity_and_replaces_details(run, session, collection):
    collection.seed("Milk", 2, unit="liters", category="Produce", expiry_date="2026-01-01")

    item = run(submit_item(session, submission(quantity="3", unit="pounds", category="Condiments")))

    assert item["quantity"] == 5
    assert collection.docs["Milk"]["unit"] == "pounds"
    assert collection.docs["Milk"]["category"] == "Condiments"
    assert collection.docs["Milk"]["expiryDate"] == ""


def test_fractional_quantities_merge(run, session, collection):
    collection.seed("Flour", 1.5)

    item = run(submit_item(session, submission(name="Flour", quantity="0.25")))

    assert item["quantity"] == 1.75


def test_same_quantity_text_is_rejected_as_duplicate(run, session, collection):
    collection.seed("Milk", 2, unit="liters", category="Produce")
    before = dict(collection.docs["Milk"])

    with pytest.raises(DuplicateSubmissionError):
        run(submit_item(session, submission(quantity="2", unit="dozen")))

    assert collection.docs["Milk"] == before


@pytest.mark.parametrize("name, quantity", [("", "2"), (None, "2"), ("Milk", ""), ("Milk", None), ("   ", "1")])
def test_missing_fields_fail_before_any_store_access(run, session, collection, name, quantity):
    with pytest.raises(ValidationError):
        run(submit_item(session, submission(name=name, quantity=quantity)))

    assert collection.calls == []


@pytest.mark.parametrize("quantity", ["abc", "0", "-1", "nan"])
def test_bad_quantity_is_rejected(run, session, collection, quantity):
    with pytest.raises(ValidationError):
        run(submit_item(session, submission(quantity=quantity)))
    assert collection.docs == {}


def test_uploaded_image_is_stored_under_item_name(run, session, collection, image_dir):
    image = ImageSource(data=JPEG, filename="milk.jpg", content_type="image/jpeg")

    item = run(submit_item(session, submission(image=image)))

    assert (image_dir / "Milk").read_bytes() == JPEG
    assert item["image_url"].startswith("/images/Milk?token=")
    assert collection.docs["Milk"]["imageUrl"] == item["image_url"]


def test_non_image_upload_is_rejected(run, session, collection):
    image = ImageSource(data=b"hello", filename="notes.txt", content_type="text/plain")

    with pytest.raises(ValidationError):
        run(submit_item(session, submission(image=image)))
    assert collection.docs == {}


def test_merge_without_new_image_keeps_previous_url(run, session, collection):
    collection.seed("Milk", 2, image_url="/images/Milk?token=abc")

    item = run(submit_item(session, submission(quantity="1")))

    assert item["image_url"] == "/images/Milk?token=abc"


def test_captured_frame_is_uploaded_when_no_file_given(run, session, collection, image_dir):
    run(session.start_camera())
    frame = run(session.capture_frame())

    item = run(submit_item(session, submission()))

    assert (image_dir / "Milk").read_bytes() == frame
    assert item["image_url"]


def test_uploaded_file_wins_over_captured_frame(run, session, image_dir):
    run(session.start_camera())
    run(session.capture_frame())
    image = ImageSource(data=JPEG, filename="milk.png", content_type="")

    run(submit_item(session, submission(image=image)))

    assert (image_dir / "Milk").read_bytes() == JPEG


def test_captured_frame_ignored_when_not_requested(run, session, collection, image_dir):
    run(session.start_camera())
    run(session.capture_frame())

    item = run(submit_item(session, submission(use_captured_image=False)))

    assert item["image_url"] == ""
    assert not (image_dir / "Milk").exists()


def test_success_refreshes_snapshot_and_closes_form(run, session, devices):
    session.open_form()
    run(session.start_camera())

    run(submit_item(session, submission()))

    assert [item["name"] for item in session.state.inventory] == ["Milk"]
    assert session.state.form_open is False
    assert session.state.captured_image is None
    assert devices.active == []


def test_failed_upload_clears_loading_flag(run, session, collection, monkeypatch):
    async def failing_upload(name, data):
        raise RemoteOperationError("Upload images/Milk failed: disk full")

    monkeypatch.setattr(upsert, "upload_image", failing_upload)
    image = ImageSource(data=JPEG, filename="milk.jpg", content_type="image/jpeg")

    with pytest.raises(RemoteOperationError):
        run(submit_item(session, submission(image=image)))

    assert session.state.loading is False
    assert collection.docs == {}


def test_name_with_slash_fails_before_any_store_access(run, session, collection):
    with pytest.raises(ValidationError):
        run(submit_item(session, submission(name="Oil/Olive")))
    assert collection.calls == []


def test_dot_name_with_image_is_stored(run, session, collection, image_dir):
    image = ImageSource(data=JPEG, filename="x.jpg", content_type="image/jpeg")

    item = run(submit_item(session, submission(name="..", image=image)))

    assert item["image_url"].startswith("/images/%252E.?token=")
    assert collection.docs[".."]["imageUrl"] == item["image_url"]
