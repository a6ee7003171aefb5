"""
XtreamTV persistent storage

Async string key-value stores used for catalog caches, session state and
saved users.
"""

from xtreamtv.storage.base import KeyValueStore
from xtreamtv.storage.keys import StorageKeys, UserResource, user_key
from xtreamtv.storage.memory import MemoryStore

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "StorageKeys",
    "UserResource",
    "create_store",
    "user_key",
]


def create_store(backend: str = "sqlite", url: str = "", echo: bool = False) -> KeyValueStore:
    """Create a store for a configured backend name."""
    if backend == "memory":
        return MemoryStore()
    if backend == "sqlite":
        from xtreamtv.storage.sqlite import SQLiteStore
        return SQLiteStore(url or "sqlite:///./xtreamtv.db", echo=echo)
    raise ValueError(f"Unknown storage backend: {backend}")
