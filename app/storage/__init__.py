"""Persistent key-value storage backends."""

from app.core.config import Settings
from app.storage.base import KeyValueStore
from app.storage.memory import InMemoryKeyValueStore
from app.storage.sql import SqlKeyValueStore


def create_store(settings: Settings) -> KeyValueStore:
    """Pick the backend named by settings.storage_backend."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    return SqlKeyValueStore(
        settings.async_database_url,
        create_tables=settings.database_create_tables,
        echo=settings.debug,
    )


__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "SqlKeyValueStore", "create_store"]
