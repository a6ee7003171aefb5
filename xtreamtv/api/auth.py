"""Login, logout and session status endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from xtreamtv.api.deps import get_session
from xtreamtv.api.schemas import LoginRequest, SessionStatus
from xtreamtv.session import XtreamSession
from xtreamtv.xtream.models import AccountSummary, XtreamCredentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=AccountSummary)
async def login(
    request: LoginRequest,
    session: XtreamSession = Depends(get_session),
) -> AccountSummary:
    """Log in to an Xtream Codes provider."""
    try:
        credentials = XtreamCredentials(
            username=request.username,
            password=request.password,
            server_url=request.server_url,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[err["msg"] for err in e.errors()],
        ) from e

    await session.login(credentials)
    return session.user_info()


@router.post("/logout")
async def logout(session: XtreamSession = Depends(get_session)) -> dict[str, str]:
    await session.logout()
    return {"status": "logged_out"}


@router.get("/status", response_model=SessionStatus)
async def session_status(session: XtreamSession = Depends(get_session)) -> SessionStatus:
    return SessionStatus(logged_in=session.is_logged_in(), user=session.user_info())
