"""Key-value store interface shared by all backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """String keys to string values, in the manner of browser local storage.

    Values are opaque text; callers serialize to and from JSON themselves.
    """

    async def start(self) -> None:
        """Acquire resources (connections, tables). Called once at startup."""

    async def close(self) -> None:
        """Release resources. Called once at shutdown."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Create or overwrite the value for key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""

    async def contains(self, key: str) -> bool:
        return await self.get(key) is not None
