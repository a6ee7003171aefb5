"""
Xtream Codes data models.

Credentials and the authentication response are validated with pydantic.
Catalog records (categories, channels, movies, series) are passed through
as the decoded JSON objects returned by the provider; their common fields
are listed below for reference.

Category:  category_id, category_name, parent_id, category_type
Channel:   num, name, stream_type, stream_id, stream_icon, epg_channel_id,
           added, category_id, custom_sid, tv_archive, direct_source,
           tv_archive_duration
Movie:     num, name, stream_type, stream_id, stream_icon, added,
           category_id, container_extension, custom_sid, direct_source
Series:    series_id, name, cover, plot, cast, director, genre,
           release_date, last_modified, rating, rating_5based,
           backdrop_path, youtube_trailer, episode_run_time, category_id
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A decoded catalog record, unchanged from the provider response
Record = dict[str, Any]

# Providers disagree on whether numeric fields are sent as numbers or strings
Loose = Optional[Union[str, int, float]]


class CategoryType(str, Enum):
    """Tag added to category records so mixed lists can be filtered."""
    LIVE = "live"
    MOVIE = "movie"
    SERIES = "series"


class StreamFormat(str, Enum):
    """Container formats accepted for series episode URLs."""
    MP4 = "mp4"
    M3U8 = "m3u8"
    TS = "ts"


class XtreamCredentials(BaseModel):
    """Login credentials for an Xtream Codes provider."""
    username: str
    password: str
    server_url: str

    @field_validator("server_url")
    @classmethod
    def strip_trailing_slashes(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("server_url must not be empty")
        return value


class UserInfo(BaseModel):
    """`user_info` block of the authentication response."""
    model_config = ConfigDict(extra="allow")

    username: str = ""
    password: str = ""
    message: str = ""
    auth: int = 0
    status: str = ""
    exp_date: Loose = None
    is_trial: Loose = None
    active_cons: Loose = None
    created_at: Loose = None
    max_connections: Loose = None
    allowed_output_formats: list[str] = Field(default_factory=list)


class ServerInfo(BaseModel):
    """`server_info` block of the authentication response."""
    model_config = ConfigDict(extra="allow")

    url: str = ""
    port: Loose = None
    https_port: Loose = None
    server_protocol: str = ""
    rtmp_port: Loose = None
    timezone: str = ""
    timestamp_now: Loose = None
    time_now: str = ""


class AuthResponse(BaseModel):
    """Response of `player_api.php` called without an action."""
    model_config = ConfigDict(extra="allow")

    user_info: UserInfo = Field(default_factory=UserInfo)
    server_info: Optional[ServerInfo] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_info.auth != 0


class AccountSummary(BaseModel):
    """User details exposed to callers after login."""
    username: str
    exp_date: Loose = None
    status: Optional[str] = None
    max_connections: Loose = None
