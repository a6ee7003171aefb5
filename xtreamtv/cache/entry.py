"""
Catalog cache entries and validity rules.
"""

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

# 24 hours in milliseconds
DEFAULT_TTL_MS = 24 * 60 * 60 * 1000


class CatalogType(str, Enum):
    """The four independently cached catalogs.

    Values double as the storage key stem (``<prefix>_<value>_cache``).
    """
    VOD_STREAMS = "vod"
    VOD_CATEGORIES = "vod_categories"
    SERIES = "series"
    SERIES_CATEGORIES = "series_categories"

    @property
    def is_filtered(self) -> bool:
        """Stream catalogs are scoped by a category filter; category lists are not."""
        return self in (CatalogType.VOD_STREAMS, CatalogType.SERIES)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def normalize_filter(category_filter: Any) -> Optional[str]:
    """Map a requested category id to its cache form.

    Ids are compared as strings; None and "" both mean all categories.
    """
    if category_filter is None:
        return None
    value = str(category_filter).strip()
    return value or None


@dataclass
class CacheEntry:
    """One cached catalog slice."""
    data: list
    timestamp: int
    category_filter: Optional[str] = None

    def age_ms(self, now: Optional[int] = None) -> int:
        return (now if now is not None else now_ms()) - self.timestamp

    def is_fresh(self, ttl_ms: int = DEFAULT_TTL_MS, now: Optional[int] = None) -> bool:
        return self.age_ms(now) < ttl_ms

    def matches(self, category_filter: Optional[str]) -> bool:
        return self.category_filter == category_filter

    def to_dict(self) -> Dict[str, Any]:
        """Persisted form. ``categoryId`` is omitted for unfiltered entries."""
        result: Dict[str, Any] = {"data": self.data, "timestamp": self.timestamp}
        if self.category_filter is not None:
            result["categoryId"] = self.category_filter
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "CacheEntry":
        """
        Parse a persisted entry.

        Raises:
            ValueError: If the document is not a valid cache entry.
        """
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError("cache entry must be a JSON object")

        data = payload.get("data")
        timestamp = payload.get("timestamp")
        if not isinstance(data, list):
            raise ValueError("cache entry data must be a list")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise ValueError("cache entry timestamp must be a number")

        return cls(
            data=data,
            timestamp=int(timestamp),
            category_filter=normalize_filter(payload.get("categoryId")),
        )
