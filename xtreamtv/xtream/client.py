"""
Xtream Codes API client.

Thin async wrapper around `player_api.php`. The client holds no session
state: every call receives the credentials to use, so one client can be
shared by a session and by login attempts for other accounts.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from xtreamtv.xtream.models import (
    AuthResponse,
    Record,
    StreamFormat,
    XtreamCredentials,
)

logger = logging.getLogger(__name__)

API_ENDPOINT = "player_api.php"


class XtreamError(Exception):
    """Base error for Xtream Codes operations."""

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.action = action
        self.original_error = original_error


class CatalogFetchError(XtreamError):
    """Transport failure, non-2xx status or malformed payload."""


class AuthenticationError(XtreamError):
    """Provider rejected the credentials."""


class NotAuthenticatedError(XtreamError):
    """Operation requires a logged-in session."""

    def __init__(self, message: str = "Not authenticated. Please login first."):
        super().__init__(message)


class XtreamClient:
    """
    Async client for the Xtream Codes player API.

    Usage:
        async with XtreamClient(timeout=30) as client:
            auth = await client.authenticate(credentials)
            movies = await client.fetch_list(credentials, "get_vod_streams")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "XtreamTV/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "XtreamClient":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def open(self) -> None:
        self._ensure_client()

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def http(self) -> httpx.AsyncClient:
        """Underlying httpx client, created on first use."""
        return self._ensure_client()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._http_client

    @staticmethod
    def api_url(credentials: XtreamCredentials) -> str:
        return f"{credentials.server_url}/{API_ENDPOINT}"

    async def request(
        self,
        credentials: XtreamCredentials,
        action: Optional[str] = None,
        **params: Any,
    ) -> Any:
        """
        Call `player_api.php` and return the decoded JSON body.

        Parameters whose value is None are not sent, so an absent
        category_id means "all categories".

        Raises:
            CatalogFetchError: On network errors, non-2xx status or invalid JSON.
        """
        query: dict[str, Any] = {
            "username": credentials.username,
            "password": credentials.password,
        }
        if action:
            query["action"] = action
        query.update({k: v for k, v in params.items() if v is not None})

        try:
            response = await self.http.get(self.api_url(credentials), params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogFetchError(
                f"HTTP {e.response.status_code} from provider for {action or 'login'}",
                action=action,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise CatalogFetchError(
                f"Request to {credentials.server_url} failed: {e}",
                action=action,
                original_error=e,
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise CatalogFetchError(
                f"Invalid JSON from provider for {action or 'login'}",
                action=action,
                original_error=e,
            ) from e

    async def fetch_list(
        self,
        credentials: XtreamCredentials,
        action: str,
        **params: Any,
    ) -> list[Record]:
        """Call a list action (categories, streams, series)."""
        data = await self.request(credentials, action, **params)
        if not isinstance(data, list):
            raise CatalogFetchError(
                f"Expected a list from {action}, got {type(data).__name__}",
                action=action,
            )
        return data

    async def fetch_object(
        self,
        credentials: XtreamCredentials,
        action: str,
        **params: Any,
    ) -> Record:
        """Call an object action (series info, VOD info, EPG)."""
        data = await self.request(credentials, action, **params)
        if not isinstance(data, dict):
            raise CatalogFetchError(
                f"Expected an object from {action}, got {type(data).__name__}",
                action=action,
            )
        return data

    async def authenticate(self, credentials: XtreamCredentials) -> AuthResponse:
        """
        Validate credentials against the provider.

        Raises:
            AuthenticationError: If the provider reports auth == 0.
            CatalogFetchError: On transport or payload errors.
        """
        data = await self.request(credentials)
        if not isinstance(data, dict):
            raise CatalogFetchError("Unexpected login response from provider")

        try:
            auth = AuthResponse.model_validate(data)
        except ValidationError as e:
            raise CatalogFetchError(
                "Malformed login response from provider", original_error=e
            ) from e

        if not auth.is_authenticated:
            raise AuthenticationError(
                "Authentication failed. Please check your credentials."
            )
        return auth

    # Stream URLs

    @staticmethod
    def live_stream_url(credentials: XtreamCredentials, stream_id: int) -> str:
        c = credentials
        return f"{c.server_url}/live/{c.username}/{c.password}/{stream_id}.m3u8"

    @staticmethod
    def vod_stream_url(credentials: XtreamCredentials, stream_id: int) -> str:
        c = credentials
        return f"{c.server_url}/movie/{c.username}/{c.password}/{stream_id}.mp4"

    @staticmethod
    def series_stream_url(
        credentials: XtreamCredentials,
        episode_id: str,
        fmt: StreamFormat | str = StreamFormat.MP4,
    ) -> str:
        c = credentials
        ext = StreamFormat(fmt).value
        return f"{c.server_url}/series/{c.username}/{c.password}/{episode_id}.{ext}"
