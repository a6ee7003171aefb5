"""Pydantic schemas for API requests and responses"""

from typing import Any, Optional

from pydantic import BaseModel

from xtreamtv.xtream.models import AccountSummary


class LoginRequest(BaseModel):
    username: str
    password: str
    server_url: str


class SessionStatus(BaseModel):
    logged_in: bool
    user: Optional[AccountSummary] = None


class StreamUrlResponse(BaseModel):
    url: str


class CacheClearResponse(BaseModel):
    """Rewarm result per catalog type; empty when nothing was reloaded."""
    reloaded: dict[str, bool]


class CacheStatusResponse(BaseModel):
    ttl_ms: int
    entries: dict[str, dict[str, Any]]
    stats: dict[str, Any]
