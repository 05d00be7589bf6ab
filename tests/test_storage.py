"""
Key-value store tests: memory backend semantics and graceful fallback when the
backing store fails.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from database import (
    KeyValueStore, MemoryKeyValueStore, StorageError, create_store, load_value, save_value, remove_value,
)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def broken_store():
    store = MagicMock(spec=KeyValueStore)
    store.get = AsyncMock(side_effect=StorageError("quota exceeded"))
    store.set = AsyncMock(side_effect=StorageError("quota exceeded"))
    store.remove = AsyncMock(side_effect=StorageError("quota exceeded"))
    return store


class TestMemoryStore:

    def test_round_trip_and_remove(self):
        store = MemoryKeyValueStore()
        run(store.set("k", {"a": [1, 2]}))
        assert run(store.get("k")) == {"a": [1, 2]}
        run(store.remove("k"))
        assert run(store.get("k")) is None

    def test_values_are_copied(self):
        store = MemoryKeyValueStore()
        value = {"items": [1]}
        run(store.set("k", value))
        value["items"].append(2)
        loaded = run(store.get("k"))
        loaded["items"].append(3)
        assert run(store.get("k")) == {"items": [1]}

    def test_remove_missing_key_is_noop(self):
        run(MemoryKeyValueStore().remove("absent"))

    def test_create_store(self):
        assert isinstance(create_store("memory"), MemoryKeyValueStore)
        with pytest.raises(ValueError):
            create_store("sqlite")


class TestFallback:

    def test_missing_key_returns_default(self):
        assert run(load_value(MemoryKeyValueStore(), "absent", [])) == []

    def test_default_is_not_shared(self):
        default = [{"id": 1}]
        loaded = run(load_value(MemoryKeyValueStore(), "absent", default))
        loaded.append({"id": 2})
        assert default == [{"id": 1}]

    def test_read_failure_returns_default(self, broken_store, caplog):
        assert run(load_value(broken_store, "agency_users", [])) == []
        assert "Failed to load 'agency_users'" in caplog.text

    def test_write_failure_reports_false(self, broken_store):
        assert run(save_value(broken_store, "k", 1)) is False
        assert run(remove_value(broken_store, "k")) is False

    def test_successful_write_reports_true(self):
        store = MemoryKeyValueStore()
        assert run(save_value(store, "k", 1)) is True
        assert run(remove_value(store, "k")) is True
