"""
Xtream session - credentials, auth state and the public catalog surface.

An XtreamSession is built once by the application and passed to whatever
needs catalog data. It owns the catalog cache; the VOD and series
catalogs go through the cache, everything else goes straight to the
provider.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from xtreamtv.cache.entry import DEFAULT_TTL_MS, CatalogType
from xtreamtv.cache.manager import CatalogCache
from xtreamtv.storage.base import KeyValueStore
from xtreamtv.storage.keys import StorageKeys
from xtreamtv.users import SavedUsers
from xtreamtv.xtream.client import NotAuthenticatedError, XtreamClient
from xtreamtv.xtream.models import (
    AccountSummary,
    AuthResponse,
    CategoryType,
    Record,
    StreamFormat,
    XtreamCredentials,
)

logger = logging.getLogger(__name__)

# Provider action and category tag per cached catalog
CATALOG_ACTIONS: Dict[CatalogType, str] = {
    CatalogType.VOD_STREAMS: "get_vod_streams",
    CatalogType.VOD_CATEGORIES: "get_vod_categories",
    CatalogType.SERIES: "get_series",
    CatalogType.SERIES_CATEGORIES: "get_series_categories",
}

CATEGORY_TAGS: Dict[CatalogType, CategoryType] = {
    CatalogType.VOD_CATEGORIES: CategoryType.MOVIE,
    CatalogType.SERIES_CATEGORIES: CategoryType.SERIES,
}


def tag_categories(categories: List[Record], category_type: CategoryType) -> List[Record]:
    """Copy category records with ``category_type`` set."""
    return [{**category, "category_type": category_type.value} for category in categories]


def filter_by_name(records: List[Record], query: str) -> List[Record]:
    """Case-insensitive substring match on the ``name`` field."""
    needle = query.lower()
    return [r for r in records if needle in str(r.get("name") or "").lower()]


class XtreamSession:
    """
    Logged-in access to one Xtream Codes account.

    Usage:
        session = XtreamSession(client, store)
        await session.restore()
        await session.login(XtreamCredentials(...))
        movies = await session.get_vod_streams("5")
    """

    def __init__(
        self,
        client: XtreamClient,
        store: KeyValueStore,
        ttl_ms: int = DEFAULT_TTL_MS,
        keys: Optional[StorageKeys] = None,
        rewarm_on_clear: bool = True,
    ):
        self.client = client
        self.store = store
        self.keys = keys or StorageKeys()
        self.rewarm_on_clear = rewarm_on_clear
        self.cache = CatalogCache(store, self._fetch_catalog, ttl_ms=ttl_ms, keys=self.keys)
        self.saved_users = SavedUsers(store, self.keys)
        self._credentials: Optional[XtreamCredentials] = None
        self._auth: Optional[AuthResponse] = None

    # Session state

    async def restore(self) -> bool:
        """
        Load persisted auth state and catalog caches.

        Returns:
            True if a persisted login was restored.
        """
        restored = await self._load_credentials()
        await self.cache.load_caches()
        return restored

    def is_logged_in(self) -> bool:
        return self._credentials is not None and self._auth is not None

    def _ensure_authenticated(self) -> None:
        if not self.is_logged_in():
            raise NotAuthenticatedError()

    @property
    def credentials(self) -> XtreamCredentials:
        """Current credentials; raises NotAuthenticatedError when logged out."""
        self._ensure_authenticated()
        return self._credentials

    @property
    def auth_data(self) -> Optional[AuthResponse]:
        return self._auth

    def user_info(self) -> Optional[AccountSummary]:
        if not self.is_logged_in():
            return None
        user = self._auth.user_info
        return AccountSummary(
            username=self._credentials.username,
            exp_date=user.exp_date,
            status=user.status or None,
            max_connections=user.max_connections,
        )

    async def login(self, credentials: XtreamCredentials) -> AuthResponse:
        """
        Authenticate and make credentials current.

        The catalog caches are dropped unless they were fetched for this
        same account (username and server), whether they are in memory or
        were restored from the store.

        Raises:
            AuthenticationError: If the provider rejects the credentials.
            CatalogFetchError: On transport errors.
        """
        auth = await self.client.authenticate(credentials)

        owner = {"username": credentials.username, "server_url": credentials.server_url}
        if await self._load_cache_owner() != owner:
            logger.info(f"Clearing catalog caches of another account for {credentials.username}")
            await self.cache.invalidate()
            await self._save_cache_owner(owner)

        self._credentials = credentials
        self._auth = auth
        await self._save_credentials()
        await self.saved_users.save_user(
            credentials.username, credentials.password, credentials.server_url
        )

        logger.info(f"Logged in as {credentials.username} on {credentials.server_url}")
        return auth

    async def logout(self) -> None:
        """Forget credentials, drop catalog caches and user-scoped state."""
        username = self._credentials.username if self._credentials else None

        self._credentials = None
        self._auth = None

        await self.cache.invalidate()

        try:
            await self.store.remove_many([self.keys.auth, self.keys.cache_owner])
        except Exception as e:
            logger.error(f"Failed to remove auth data: {e}")

        if username:
            try:
                await self.store.remove_many(self.keys.user_keys(username))
                logger.info(f"Cleared user-specific data for {username}")
            except Exception as e:
                logger.error(f"Error clearing user-specific data: {e}")

    # Cached catalogs

    async def get_vod_categories(self) -> List[Record]:
        self._ensure_authenticated()
        return await self.cache.fetch_catalog(CatalogType.VOD_CATEGORIES)

    async def get_series_categories(self) -> List[Record]:
        self._ensure_authenticated()
        return await self.cache.fetch_catalog(CatalogType.SERIES_CATEGORIES)

    async def get_vod_streams(self, category_id: Optional[str] = None) -> List[Record]:
        self._ensure_authenticated()
        return await self.cache.fetch_catalog(CatalogType.VOD_STREAMS, category_id)

    async def get_series(self, category_id: Optional[str] = None) -> List[Record]:
        self._ensure_authenticated()
        return await self.cache.fetch_catalog(CatalogType.SERIES, category_id)

    async def clear_cache(self) -> Dict[CatalogType, bool]:
        """Reset the catalog cache and reload it when logged in."""
        return await self.cache.clear_cache(
            rewarm=self.rewarm_on_clear and self.is_logged_in()
        )

    # Uncached provider calls

    async def get_live_categories(self) -> List[Record]:
        categories = await self.client.fetch_list(self.credentials, "get_live_categories")
        return tag_categories(categories, CategoryType.LIVE)

    async def get_live_streams(self, category_id: Optional[str] = None) -> List[Record]:
        return await self.client.fetch_list(
            self.credentials, "get_live_streams", category_id=category_id or None
        )

    async def get_series_info(self, series_id: int) -> Record:
        return await self.client.fetch_object(
            self.credentials, "get_series_info", series_id=series_id
        )

    async def get_vod_info(self, vod_id: int) -> Record:
        return await self.client.fetch_object(self.credentials, "get_vod_info", vod_id=vod_id)

    async def get_short_epg(self, stream_id: int, limit: Optional[int] = None) -> Record:
        return await self.client.fetch_object(
            self.credentials, "get_short_epg", stream_id=stream_id, limit=limit or None
        )

    # Search

    async def search_live_streams(self, query: str) -> List[Record]:
        return filter_by_name(await self.get_live_streams(), query)

    async def search_vod_streams(self, query: str) -> List[Record]:
        return filter_by_name(await self.get_vod_streams(), query)

    async def search_series(self, query: str) -> List[Record]:
        return filter_by_name(await self.get_series(), query)

    # Stream URLs

    def live_stream_url(self, stream_id: int) -> str:
        return self.client.live_stream_url(self.credentials, stream_id)

    def vod_stream_url(self, stream_id: int) -> str:
        return self.client.vod_stream_url(self.credentials, stream_id)

    def series_stream_url(
        self,
        episode_id: str,
        fmt: StreamFormat | str = StreamFormat.MP4,
    ) -> str:
        return self.client.series_stream_url(self.credentials, episode_id, fmt)

    # Internals

    async def _fetch_catalog(
        self,
        catalog_type: CatalogType,
        category_filter: Optional[str],
    ) -> List[Record]:
        action = CATALOG_ACTIONS[catalog_type]
        records = await self.client.fetch_list(
            self.credentials, action, category_id=category_filter
        )
        tag = CATEGORY_TAGS.get(catalog_type)
        return tag_categories(records, tag) if tag else records

    async def _load_credentials(self) -> bool:
        try:
            raw = await self.store.get(self.keys.auth)
            if not raw:
                return False
            payload: Dict[str, Any] = json.loads(raw)
            self._credentials = XtreamCredentials.model_validate(payload["credentials"])
            self._auth = AuthResponse.model_validate(payload["auth_data"])
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            logger.error(f"Failed to parse auth data: {e}")
            self._credentials = None
            self._auth = None
            return False
        except Exception as e:
            logger.error(f"Failed to load auth data: {e}")
            return False

        logger.info(f"Restored session for {self._credentials.username}")
        return True

    async def _save_credentials(self) -> None:
        try:
            await self.store.set(
                self.keys.auth,
                json.dumps(
                    {
                        "credentials": self._credentials.model_dump(),
                        "auth_data": self._auth.model_dump(),
                    }
                ),
            )
        except Exception as e:
            logger.error(f"Failed to save auth data: {e}")

    async def _load_cache_owner(self) -> Optional[Dict[str, str]]:
        try:
            raw = await self.store.get(self.keys.cache_owner)
            return json.loads(raw) if raw else None
        except Exception as e:
            logger.error(f"Failed to load catalog cache owner: {e}")
            return None

    async def _save_cache_owner(self, owner: Dict[str, str]) -> None:
        try:
            await self.store.set(self.keys.cache_owner, json.dumps(owner))
        except Exception as e:
            logger.error(f"Failed to save catalog cache owner: {e}")
