import json
import os
from datetime import datetime, timezone

import pytest
from bson import ObjectId

import database
from database import CollectionStore, MemoryStore, new_id, to_json


def test_read_missing_collection_is_empty(tmp_path):
    store = CollectionStore(str(tmp_path))
    assert store.read("products") == []
    assert store.read("settings", default={}) == {}
    assert not store.exists("products")


def test_write_replaces_whole_document(tmp_path):
    store = CollectionStore(str(tmp_path / "nested"))
    store.write("faqs", [{"id": "a"}, {"id": "b"}])
    store.write("faqs", [{"id": "c"}])
    assert store.read("faqs") == [{"id": "c"}]
    with open(tmp_path / "nested" / "faqs.json", encoding="utf-8") as f:
        assert json.load(f) == [{"id": "c"}]
    assert store.names() == ["faqs"]


def test_transaction_persists_on_exit(tmp_path):
    store = CollectionStore(str(tmp_path))
    with store.transaction("banners") as banners:
        banners.append({"id": "1", "title": "Hello"})
    assert store.read("banners") == [{"id": "1", "title": "Hello"}]


def test_transaction_discards_on_error(tmp_path):
    store = CollectionStore(str(tmp_path))
    store.write("banners", [{"id": "1"}])
    with pytest.raises(RuntimeError):
        with store.transaction("banners") as banners:
            banners.append({"id": "2"})
            raise RuntimeError("boom")
    assert store.read("banners") == [{"id": "1"}]


def test_to_json_converts_ids_and_dates():
    oid = ObjectId()
    when = datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert to_json({"a": oid, "b": [when]}) == {"a": str(oid), "b": [when.isoformat()]}


def test_new_id_is_unique_hex():
    ids = {new_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(ObjectId.is_valid(i) for i in ids)


def test_memory_store_returns_copies():
    store = MemoryStore({"faqs": [{"id": "1"}]})
    faqs = store.read("faqs")
    faqs.append({"id": "2"})
    assert store.read("faqs") == [{"id": "1"}]
    assert store.exists("faqs")
    assert not store.exists("banners")


@pytest.mark.skipif("DATA_DIR" in os.environ, reason="DATA_DIR overridden by environment")
def test_default_data_dir_is_relative_to_working_directory():
    assert database.DATA_DIR == "data"
    assert not os.path.isabs(CollectionStore().data_dir)
