import copy
import logging
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from config import STORAGE_BACKEND, MONGO_URL, DB_NAME

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the backing store cannot be read or written."""


class KeyValueStore:
    """Persistence port: a single namespace of JSON-like values addressed by key."""

    async def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    async def remove(self, key: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str) -> Optional[Any]:
        # Copies keep callers from mutating stored state in place
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)


class MongoKeyValueStore(KeyValueStore):
    def __init__(self, mongo_url: str = MONGO_URL, db_name: str = DB_NAME, collection: str = "kv_store"):
        self.client = AsyncIOMotorClient(mongo_url)
        self.collection = self.client[db_name][collection]

    async def get(self, key: str) -> Optional[Any]:
        try:
            doc = await self.collection.find_one({"key": key}, {"_id": 0, "value": 1})
        except PyMongoError as exc:
            raise StorageError(f"Failed to read '{key}'") from exc
        return doc["value"] if doc else None

    async def set(self, key: str, value: Any) -> None:
        try:
            await self.collection.update_one({"key": key}, {"$set": {"value": value}}, upsert=True)
        except PyMongoError as exc:
            raise StorageError(f"Failed to write '{key}'") from exc

    async def remove(self, key: str) -> None:
        try:
            await self.collection.delete_one({"key": key})
        except PyMongoError as exc:
            raise StorageError(f"Failed to remove '{key}'") from exc

    def close(self) -> None:
        self.client.close()


def create_store(backend: str = STORAGE_BACKEND) -> KeyValueStore:
    if backend == "mongo":
        return MongoKeyValueStore()
    if backend == "memory":
        return MemoryKeyValueStore()
    raise ValueError(f"Unknown storage backend '{backend}'")


async def load_value(store: KeyValueStore, key: str, default: Any = None) -> Any:
    """Read a key, falling back to `default` when it is missing or the store fails."""
    try:
        value = await store.get(key)
    except StorageError as exc:
        logger.error("Failed to load '%s' from storage: %s", key, exc)
        return copy.deepcopy(default)
    return copy.deepcopy(default) if value is None else value


async def save_value(store: KeyValueStore, key: str, value: Any) -> bool:
    try:
        await store.set(key, value)
    except StorageError as exc:
        logger.error("Failed to save '%s' to storage: %s", key, exc)
        return False
    return True


async def remove_value(store: KeyValueStore, key: str) -> bool:
    try:
        await store.remove(key)
    except StorageError as exc:
        logger.error("Failed to remove '%s' from storage: %s", key, exc)
        return False
    return True
