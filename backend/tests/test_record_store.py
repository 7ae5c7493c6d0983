import pytest

from notekeeper.errors import AlreadyExists, ConfigurationError, StorageError
from notekeeper.storage.record_store import JsonFileStore, MemoryStore, open_store


@pytest.fixture(params=["file", "memory"])
def store(request, tmp_path):
    return open_store(request.param, tmp_path, "things")


def test_get_put_delete(store):
    assert store.get("k1") is None

    store.put("k1", {"a": 1})
    assert store.get("k1") == {"a": 1}

    store.put("k1", {"a": 2})
    assert store.get("k1") == {"a": 2}

    assert store.delete("k1") is True
    assert store.get("k1") is None
    assert store.delete("k1") is False


def test_insert_refuses_existing_key(store):
    store.insert("k1", {"a": 1})
    with pytest.raises(AlreadyExists):
        store.insert("k1", {"a": 2})
    assert store.get("k1") == {"a": 1}


def test_values_lists_every_record(store):
    store.put("a", {"n": 1})
    store.put("b", {"n": 2})
    assert sorted(r["n"] for r in store.values()) == [1, 2]


@pytest.mark.parametrize("key", ["", "../x", "a/b", "a\\b", ".hidden"])
def test_unsafe_keys_are_rejected(store, key):
    with pytest.raises(ValueError):
        store.get(key)


def test_memory_store_returns_copies():
    store = MemoryStore()
    store.put("k", {"items": [1]})
    got = store.get("k")
    got["items"].append(2)
    assert store.get("k") == {"items": [1]}


def test_file_store_layout_and_no_tmp_left_behind(tmp_path):
    store = JsonFileStore(tmp_path, "things")
    store.put("k", {"a": 1})
    assert (tmp_path / "things" / "k.json").exists()
    assert not list((tmp_path / "things").glob("*.tmp"))


def test_file_store_corrupt_record_is_a_storage_error(tmp_path):
    store = JsonFileStore(tmp_path, "things")
    (tmp_path / "things").mkdir()
    (tmp_path / "things" / "k.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        store.get("k")


def test_unknown_backend(tmp_path):
    with pytest.raises(ConfigurationError):
        open_store("mongo", tmp_path, "things")
