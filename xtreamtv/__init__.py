"""
XtreamTV - Xtream Codes catalog client

Client for IPTV providers speaking the Xtream Codes player API:
- Live TV, VOD and series catalogs
- 24 hour catalog cache persisted across restarts
- Stream URL building for external players
- Small HTTP API for UI clients
"""

__version__ = "1.0.0"
__author__ = "XtreamTV Contributors"
__license__ = "MIT"

from xtreamtv.config import get_config, load_config

__all__ = [
    "__version__",
    "get_config",
    "load_config",
]
