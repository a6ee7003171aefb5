"""FastAPI dependencies"""

from fastapi import Request

from xtreamtv.session import XtreamSession


def get_session(request: Request) -> XtreamSession:
    """The session built by the application lifespan."""
    return request.app.state.session
