"""
Mock API Responses

Pre-defined mock responses for external service testing.
"""

from .xtream_responses import (
    LIVE_CATEGORIES,
    LIVE_STREAMS,
    SERIES,
    SERIES_CATEGORIES,
    SERIES_INFO,
    SERVER_URL,
    SHORT_EPG,
    VOD_CATEGORIES,
    VOD_INFO,
    VOD_STREAMS,
    login_response,
)

__all__ = [
    "LIVE_CATEGORIES",
    "LIVE_STREAMS",
    "SERIES",
    "SERIES_CATEGORIES",
    "SERIES_INFO",
    "SERVER_URL",
    "SHORT_EPG",
    "VOD_CATEGORIES",
    "VOD_INFO",
    "VOD_STREAMS",
    "login_response",
]
