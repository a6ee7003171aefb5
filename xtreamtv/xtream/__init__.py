"""
Xtream Codes provider API

Client, errors and data models for `player_api.php`.
"""

from xtreamtv.xtream.client import (
    AuthenticationError,
    CatalogFetchError,
    NotAuthenticatedError,
    XtreamClient,
    XtreamError,
)
from xtreamtv.xtream.models import (
    AccountSummary,
    AuthResponse,
    CategoryType,
    Record,
    StreamFormat,
    XtreamCredentials,
)

__all__ = [
    "AccountSummary",
    "AuthResponse",
    "AuthenticationError",
    "CatalogFetchError",
    "CategoryType",
    "NotAuthenticatedError",
    "Record",
    "StreamFormat",
    "XtreamClient",
    "XtreamCredentials",
    "XtreamError",
]
