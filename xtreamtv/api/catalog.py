"""Catalog endpoints: categories, streams, series, search and cache control"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from xtreamtv.api.deps import get_session
from xtreamtv.api.schemas import CacheClearResponse, CacheStatusResponse, StreamUrlResponse
from xtreamtv.session import XtreamSession
from xtreamtv.xtream.models import Record, StreamFormat

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["Catalog"])


class SearchKind(str, Enum):
    LIVE = "live"
    VOD = "vod"
    SERIES = "series"


@router.get("/vod/categories")
async def vod_categories(session: XtreamSession = Depends(get_session)) -> list[Record]:
    return await session.get_vod_categories()


@router.get("/vod")
async def vod_streams(
    category_id: Optional[str] = None,
    session: XtreamSession = Depends(get_session),
) -> list[Record]:
    return await session.get_vod_streams(category_id)


@router.get("/vod/{vod_id}/info")
async def vod_info(vod_id: int, session: XtreamSession = Depends(get_session)) -> Record:
    return await session.get_vod_info(vod_id)


@router.get("/vod/{stream_id}/url", response_model=StreamUrlResponse)
async def vod_url(stream_id: int, session: XtreamSession = Depends(get_session)):
    return StreamUrlResponse(url=session.vod_stream_url(stream_id))


@router.get("/series/categories")
async def series_categories(session: XtreamSession = Depends(get_session)) -> list[Record]:
    return await session.get_series_categories()


@router.get("/series")
async def series(
    category_id: Optional[str] = None,
    session: XtreamSession = Depends(get_session),
) -> list[Record]:
    return await session.get_series(category_id)


@router.get("/series/{series_id}/info")
async def series_info(series_id: int, session: XtreamSession = Depends(get_session)) -> Record:
    return await session.get_series_info(series_id)


@router.get("/series/episodes/{episode_id}/url", response_model=StreamUrlResponse)
async def episode_url(
    episode_id: str,
    format: StreamFormat = StreamFormat.MP4,
    session: XtreamSession = Depends(get_session),
):
    return StreamUrlResponse(url=session.series_stream_url(episode_id, format))


@router.get("/live/categories")
async def live_categories(session: XtreamSession = Depends(get_session)) -> list[Record]:
    return await session.get_live_categories()


@router.get("/live")
async def live_streams(
    category_id: Optional[str] = None,
    session: XtreamSession = Depends(get_session),
) -> list[Record]:
    return await session.get_live_streams(category_id)


@router.get("/live/{stream_id}/epg")
async def live_epg(
    stream_id: int,
    limit: Optional[int] = Query(default=None, ge=1),
    session: XtreamSession = Depends(get_session),
) -> Record:
    return await session.get_short_epg(stream_id, limit)


@router.get("/live/{stream_id}/url", response_model=StreamUrlResponse)
async def live_url(stream_id: int, session: XtreamSession = Depends(get_session)):
    return StreamUrlResponse(url=session.live_stream_url(stream_id))


@router.get("/search")
async def search(
    q: str = Query(..., min_length=1),
    kind: SearchKind = SearchKind.VOD,
    session: XtreamSession = Depends(get_session),
) -> list[Record]:
    """Search one catalog by name."""
    if kind == SearchKind.LIVE:
        return await session.search_live_streams(q)
    if kind == SearchKind.SERIES:
        return await session.search_series(q)
    return await session.search_vod_streams(q)


@router.post("/cache/clear", response_model=CacheClearResponse)
async def clear_cache(session: XtreamSession = Depends(get_session)):
    """Drop cached catalogs and reload them when logged in."""
    results = await session.clear_cache()
    return CacheClearResponse(
        reloaded={catalog_type.value: ok for catalog_type, ok in results.items()}
    )


@router.get("/cache", response_model=CacheStatusResponse)
async def cache_status(session: XtreamSession = Depends(get_session)) -> dict[str, Any]:
    return session.cache.describe()
