"""Health check API endpoint for XtreamTV"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends

from xtreamtv import __version__
from xtreamtv.api.deps import get_session
from xtreamtv.session import XtreamSession

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check(session: XtreamSession = Depends(get_session)) -> dict[str, Any]:
    """Service liveness plus session and cache summary."""
    cached = sum(1 for slot in session.cache.describe()["entries"].values() if slot["cached"])
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now().isoformat(),
        "logged_in": session.is_logged_in(),
        "cached_catalogs": cached,
    }
