"""
-------
test_gallery.py
-------
"""

from datetime import datetime, timedelta, timezone
import json

import pytest

import storage.gallery as gallery
from storage import (
    ArtworkNotFoundError,
    ArtworkRecord,
    GalleryFullError,
    GalleryStore,
    StorageError,
)


@pytest.fixture(autouse=True)
def ticking_clock(monkeypatch):
    """Each call to the store's clock is one minute later than the last."""
    start = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    monkeypatch.setattr(gallery, "_now", lambda: start + timedelta(minutes=next(ticks)))


@pytest.fixture
def store(tmp_path):
    return GalleryStore(str(tmp_path / "gallery.json"), device_id="device-a")


def test_empty_store_lists_nothing(store) -> None:
    assert store.list() == []


def test_save_and_get(store) -> None:
    rec = store.save("shape:star;rotation:45.0", title="First")
    assert rec.device_id == "device-a"
    assert rec.title == "First"
    got = store.get(rec.piece_id)
    assert got == rec


def test_list_is_newest_first(store) -> None:
    a = store.save("shape:circle")
    b = store.save("shape:star")
    c = store.save("shape:arrow")
    assert [r.piece_id for r in store.list()] == [c.piece_id, b.piece_id, a.piece_id]


def test_records_survive_reopen(store, tmp_path) -> None:
    rec = store.save("shape:hexagon", title=None)
    again = GalleryStore(str(tmp_path / "gallery.json"), device_id="device-a")
    assert again.list() == [rec]


def test_list_is_device_scoped_but_get_is_not(store, tmp_path) -> None:
    mine = store.save("shape:circle")
    other = GalleryStore(str(tmp_path / "gallery.json"), device_id="device-b")
    theirs = other.save("shape:square")
    assert store.list() == [mine]
    assert other.list() == [theirs]
    assert store.get(theirs.piece_id) == theirs


def test_full_gallery_reports_existing(tmp_path) -> None:
    store = GalleryStore(str(tmp_path / "g.json"), device_id="d", limit=2)
    first = store.save("shape:circle")
    second = store.save("shape:star")
    with pytest.raises(GalleryFullError) as exc:
        store.save("shape:arrow")
    assert exc.value.limit == 2
    assert [r.piece_id for r in exc.value.existing] == [second.piece_id, first.piece_id]
    assert "Gallery is full" in str(exc.value)
    assert len(store.list()) == 2


def test_limit_counts_only_this_device(tmp_path) -> None:
    path = str(tmp_path / "g.json")
    GalleryStore(path, device_id="other", limit=1).save("shape:circle")
    store = GalleryStore(path, device_id="mine", limit=1)
    store.save("shape:star")
    with pytest.raises(GalleryFullError):
        store.save("shape:arrow")


def test_replace_frees_a_full_gallery(tmp_path) -> None:
    store = GalleryStore(str(tmp_path / "g.json"), device_id="d", limit=1)
    old = store.save("shape:circle", title="old")
    new = store.replace(old.piece_id, "shape:star", title="new")
    assert new.piece_id != old.piece_id
    assert new.device_id == "d"
    assert new.artwork_string == "shape:star"
    assert new.title == "new"
    assert new.timestamp > old.timestamp
    assert store.list() == [new]
    with pytest.raises(ArtworkNotFoundError):
        store.get(old.piece_id)


def test_replace_cannot_touch_another_devices_piece(tmp_path) -> None:
    path = str(tmp_path / "g.json")
    theirs = GalleryStore(path, device_id="other").save("shape:circle", title="theirs")
    store = GalleryStore(path, device_id="mine")
    with pytest.raises(ArtworkNotFoundError):
        store.replace(theirs.piece_id, "shape:star")
    assert store.get(theirs.piece_id) == theirs
    assert store.list() == []


def test_rename_changes_only_title(store) -> None:
    rec = store.save("shape:circle;rotation:10.0", title="draft")
    renamed = store.rename(rec.piece_id, "final")
    assert renamed.title == "final"
    assert renamed.piece_id == rec.piece_id
    assert renamed.artwork_string == rec.artwork_string
    assert renamed.timestamp == rec.timestamp
    assert store.get(rec.piece_id) == renamed
    assert store.rename(rec.piece_id, None).title is None


def test_failed_write_leaves_no_temp_file(store, tmp_path, monkeypatch) -> None:
    store.save("shape:circle")

    def disk_full(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(gallery.json, "dump", disk_full)
    with pytest.raises(StorageError):
        store.save("shape:star")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["gallery.json"]
    assert len(store.list()) == 1


def test_update_keeps_title(store) -> None:
    rec = store.save("shape:circle", title="keep me")
    updated = store.update(rec.piece_id, "shape:oval")
    assert updated.title == "keep me"
    assert store.get(rec.piece_id).artwork_string == "shape:oval"


def test_delete(store) -> None:
    a = store.save("shape:circle")
    b = store.save("shape:star")
    store.delete(a.piece_id)
    assert store.list() == [b]
    with pytest.raises(ArtworkNotFoundError):
        store.get(a.piece_id)


@pytest.mark.parametrize("op", ["get", "update", "rename", "replace", "delete"])
def test_unknown_id_is_not_found(store, op) -> None:
    store.save("shape:circle")
    method = getattr(store, op)
    args = ("missing",) if op in ("get", "delete") else ("missing", "shape:star")
    with pytest.raises(ArtworkNotFoundError) as exc:
        method(*args)
    assert exc.value.piece_id == "missing"


def test_corrupt_file_is_storage_error(tmp_path) -> None:
    path = tmp_path / "g.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        GalleryStore(str(path), device_id="d").list()


def test_wrong_document_shape_is_storage_error(tmp_path) -> None:
    path = tmp_path / "g.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(StorageError):
        GalleryStore(str(path), device_id="d").list()


def test_malformed_record_is_storage_error(tmp_path) -> None:
    path = tmp_path / "g.json"
    path.write_text(json.dumps({"version": 1, "pieces": [{"piece_id": "x"}]}), encoding="utf-8")
    with pytest.raises(StorageError):
        GalleryStore(str(path), device_id="d").get("x")


def test_record_dict_roundtrip() -> None:
    rec = ArtworkRecord(
        piece_id="p1",
        device_id="d1",
        artwork_string="shape:star",
        timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        title="t",
    )
    assert ArtworkRecord.from_dict(rec.to_dict()) == rec


def test_default_device_id_is_stable() -> None:
    assert gallery.default_device_id() == gallery.default_device_id()
