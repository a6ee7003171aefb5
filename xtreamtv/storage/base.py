"""
Persistent key-value store interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Abstract async string key-value store.

    Values survive process restarts for every backend except
    MemoryStore. Implementations raise on I/O failure; callers that
    treat persistence as best effort catch and log.
    """

    async def initialize(self) -> None:
        """Prepare the backend (create tables, open connections)."""

    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get a value, or None when the key is absent."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value, replacing any existing one."""
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        pass

    async def remove_many(self, keys: list[str]) -> None:
        """Remove several keys."""
        for key in keys:
            await self.remove(key)
