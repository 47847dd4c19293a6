# tests/test_storage.py
import json
import os

import pytest

from app.database import CollectionStore, parse_id
from app.errors import StorageError, ValidationError
from app.storage import load_collection, save_collection


def test_load_missing_file_is_empty(tmp_path):
    assert load_collection(tmp_path / "nope.json") == []


def test_load_corrupt_file_is_empty(tmp_path):
    path = tmp_path / "products.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_collection(path) == []


def test_load_non_array_is_empty(tmp_path):
    path = tmp_path / "products.json"
    path.write_text('{"id": 1}', encoding="utf-8")
    assert load_collection(path) == []


def test_save_creates_parents_and_pretty_prints(tmp_path):
    path = tmp_path / "a" / "b" / "carts.json"
    save_collection(path, [{"id": 1, "products": []}])
    text = path.read_text(encoding="utf-8")
    assert text.startswith('[\n  {\n    "id": 1,')
    assert json.loads(text) == [{"id": 1, "products": []}]
    # no temp files left behind
    assert [p.name for p in path.parent.iterdir()] == ["carts.json"]


def test_save_into_non_directory_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file", encoding="utf-8")
    with pytest.raises(StorageError):
        save_collection(blocker / "products.json", [])


def test_store_bootstraps_missing_file(tmp_path):
    path = tmp_path / "data" / "products.json"
    store = CollectionStore(path)
    assert store.path == path
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_store_keeps_existing_file(tmp_path):
    path = tmp_path / "products.json"
    save_collection(path, [{"id": 7}])
    CollectionStore(path)
    assert load_collection(path) == [{"id": 7}]


def test_bootstrap_failure_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(StorageError):
        CollectionStore(blocker / "carts.json")


def test_next_id():
    assert CollectionStore.next_id([]) == 1
    assert CollectionStore.next_id([{"id": 3}, {"id": 1}]) == 4


def test_find_index_accepts_string_ids():
    entities = [{"id": 1}, {"id": 2}]
    assert CollectionStore.find_index(entities, "2") == 1
    assert CollectionStore.find_index(entities, 2) == 1
    assert CollectionStore.find_index(entities, "9") is None


@pytest.mark.parametrize("bad", ["abc", "0", "-1", 0, True, None, "1.5", "²", "١٢"])
def test_parse_id_rejects_garbage(bad):
    with pytest.raises(ValidationError):
        parse_id(bad)


def test_parse_id_trims_whitespace():
    assert parse_id(" 12 ") == 12


def test_failed_replace_keeps_prior_file(tmp_path, monkeypatch):
    path = tmp_path / "products.json"
    save_collection(path, [{"id": 1}])

    def refuse(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", refuse)
    with pytest.raises(StorageError) as exc:
        save_collection(path, [{"id": 1}, {"id": 2}])
    assert "disk full" in str(exc.value)

    monkeypatch.undo()
    assert load_collection(path) == [{"id": 1}]
    assert [p.name for p in tmp_path.iterdir()] == ["products.json"]
