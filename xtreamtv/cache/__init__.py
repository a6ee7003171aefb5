"""
XtreamTV catalog cache

Single-slot, 24 hour cache for the VOD and series catalogs, mirrored to
the persistent key-value store.
"""

from xtreamtv.cache.entry import DEFAULT_TTL_MS, CacheEntry, CatalogType, now_ms
from xtreamtv.cache.manager import CacheStats, CatalogCache, CatalogFetcher

__all__ = [
    "DEFAULT_TTL_MS",
    "CacheEntry",
    "CacheStats",
    "CatalogCache",
    "CatalogFetcher",
    "CatalogType",
    "now_ms",
]
