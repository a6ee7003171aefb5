"""
Catalog cache manager - single-slot, time-boxed catalog cache.

Each catalog type owns one in-memory slot. A slot is served while it is
younger than the TTL and (for stream catalogs) was fetched under the same
category filter; otherwise the catalog is fetched again and the slot is
replaced. Every replacement is mirrored to the key-value store so the
cache survives restarts.

There is no lock and no in-flight de-duplication: two callers that both
find a slot invalid both fetch, and the last one to finish owns the slot.
A fetch started before an invalidation is returned to its caller but is
not stored.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from xtreamtv.cache.entry import (
    DEFAULT_TTL_MS,
    CacheEntry,
    CatalogType,
    normalize_filter,
    now_ms,
)
from xtreamtv.storage.base import KeyValueStore
from xtreamtv.storage.keys import StorageKeys

logger = logging.getLogger(__name__)

# Fetches one catalog from the provider: (catalog_type, category_filter) -> records
CatalogFetcher = Callable[[CatalogType, Optional[str]], Awaitable[list]]

# Called after the cache has been cleared
InvalidationListener = Callable[[], Any]


@dataclass
class CacheStats:
    """Catalog cache statistics."""
    hits: int = 0
    misses: int = 0
    fetch_errors: int = 0
    persist_errors: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "fetch_errors": self.fetch_errors,
            "persist_errors": self.persist_errors,
            "hit_rate": round(self.hit_rate, 2),
        }


class CatalogCache:
    """
    Cache for the VOD, VOD category, series and series category catalogs.

    Usage:
        cache = CatalogCache(store, fetcher)
        await cache.load_caches()
        movies = await cache.fetch_catalog(CatalogType.VOD_STREAMS, "5")
    """

    def __init__(
        self,
        store: KeyValueStore,
        fetcher: CatalogFetcher,
        ttl_ms: int = DEFAULT_TTL_MS,
        keys: Optional[StorageKeys] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.fetcher = fetcher
        self.ttl_ms = ttl_ms
        self.keys = keys or StorageKeys()
        self.stats = CacheStats()
        self._clock = clock
        self._entries: Dict[CatalogType, Optional[CacheEntry]] = {
            catalog_type: None for catalog_type in CatalogType
        }
        self._listeners: List[InvalidationListener] = []
        # Bumped by invalidate(); fetches started under an older epoch are not stored
        self._epoch = 0

    def storage_key(self, catalog_type: CatalogType) -> str:
        return self.keys.catalog(catalog_type.value)

    def entry(self, catalog_type: CatalogType) -> Optional[CacheEntry]:
        """Current in-memory entry for a catalog type."""
        return self._entries[catalog_type]

    def is_valid(self, catalog_type: CatalogType, category_filter: Any = None) -> bool:
        """Whether a request could be served from memory right now."""
        entry = self._entries[catalog_type]
        if entry is None:
            return False
        if not entry.is_fresh(self.ttl_ms, self._clock()):
            return False
        if catalog_type.is_filtered and not entry.matches(normalize_filter(category_filter)):
            return False
        return True

    async def fetch_catalog(
        self,
        catalog_type: CatalogType,
        category_filter: Any = None,
    ) -> list:
        """
        Return a catalog, from memory when valid, otherwise from the provider.

        Category catalogs ignore category_filter.

        Raises:
            Whatever the fetcher raises. The previous entry is kept as is.
        """
        requested = normalize_filter(category_filter) if catalog_type.is_filtered else None

        if self.is_valid(catalog_type, requested):
            self.stats.hits += 1
            logger.debug(f"Using cached {catalog_type.value} (filter={requested})")
            return self._entries[catalog_type].data

        self.stats.misses += 1
        epoch = self._epoch
        logger.info(f"Fetching {catalog_type.value} from provider (filter={requested})")

        try:
            data = await self.fetcher(catalog_type, requested)
        except Exception:
            self.stats.fetch_errors += 1
            raise

        if epoch != self._epoch:
            logger.info(f"Discarding {catalog_type.value} fetched before the cache was cleared")
            return data

        entry = CacheEntry(data=data, timestamp=self._clock(), category_filter=requested)
        self._entries[catalog_type] = entry
        await self._persist(catalog_type, entry)
        return data

    async def load_caches(self) -> int:
        """
        Restore entries from the store.

        Each key is read independently; a missing, unreadable or corrupt
        key leaves its slot empty without affecting the others.

        Returns:
            Number of entries restored.
        """
        results = await asyncio.gather(
            *(self._restore(catalog_type) for catalog_type in CatalogType)
        )
        restored = sum(1 for ok in results if ok)
        logger.info(f"Restored {restored}/{len(CatalogType)} catalog caches")
        return restored

    async def invalidate(self) -> None:
        """Drop every entry from memory and from the store."""
        self._epoch += 1
        for catalog_type in CatalogType:
            self._entries[catalog_type] = None

        for catalog_type in CatalogType:
            key = self.storage_key(catalog_type)
            try:
                await self.store.remove(key)
            except Exception as e:
                self.stats.persist_errors += 1
                logger.error(f"Failed to remove cache key {key}: {e}")

        await self._notify()

    async def clear_cache(self, rewarm: bool = True) -> Dict[CatalogType, bool]:
        """
        Reset the cache and, when rewarm is set, fetch every catalog again.

        Rewarm is best effort: a failing catalog is logged and the others
        are still fetched. Nothing is raised to the caller.

        Returns:
            Per catalog type, whether the rewarm fetch succeeded. Empty when
            rewarm is off.
        """
        await self.invalidate()

        results: Dict[CatalogType, bool] = {}
        if not rewarm:
            return results

        logger.info("Reloading catalog caches")
        for catalog_type in CatalogType:
            try:
                data = await self.fetch_catalog(catalog_type)
                results[catalog_type] = True
                logger.info(f"Reloaded {len(data)} {catalog_type.value} records")
            except Exception as e:
                results[catalog_type] = False
                logger.error(f"Error reloading {catalog_type.value}: {e}")

        return results

    def add_listener(self, listener: InvalidationListener) -> None:
        """Register a callable run after the cache is cleared."""
        self._listeners.append(listener)

    def remove_listener(self, listener: InvalidationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def describe(self) -> Dict[str, Any]:
        """Snapshot of every slot, for status reporting."""
        now = self._clock()
        slots = {}
        for catalog_type, entry in self._entries.items():
            if entry is None:
                slots[catalog_type.value] = {"cached": False}
                continue
            slots[catalog_type.value] = {
                "cached": True,
                "timestamp": entry.timestamp,
                "category_filter": entry.category_filter,
                "count": len(entry.data),
                "fresh": entry.is_fresh(self.ttl_ms, now),
            }
        return {"ttl_ms": self.ttl_ms, "entries": slots, "stats": self.stats.to_dict()}

    async def _persist(self, catalog_type: CatalogType, entry: CacheEntry) -> None:
        key = self.storage_key(catalog_type)
        try:
            await self.store.set(key, entry.to_json())
        except Exception as e:
            self.stats.persist_errors += 1
            logger.error(f"Failed to save {catalog_type.value} cache: {e}")

    async def _restore(self, catalog_type: CatalogType) -> bool:
        key = self.storage_key(catalog_type)
        epoch = self._epoch
        try:
            raw = await self.store.get(key)
            if raw is None:
                return False
            entry = CacheEntry.from_json(raw)
        except Exception as e:
            logger.error(f"Failed to load {catalog_type.value} cache: {e}")
            return False

        if not catalog_type.is_filtered:
            entry.category_filter = None

        # Cleared while reading, or a fetch that finished during startup is newer
        if epoch != self._epoch or self._entries[catalog_type] is not None:
            return False

        self._entries[catalog_type] = entry
        return True

    async def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                result = listener()
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error(f"Cache invalidation listener failed: {e}")
