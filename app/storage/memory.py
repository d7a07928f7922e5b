"""In-memory key-value store for tests and throwaway runs."""

from __future__ import annotations

from app.storage.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store. Data is lost when the process stops."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of the raw contents, for assertions."""
        return dict(self._data)
