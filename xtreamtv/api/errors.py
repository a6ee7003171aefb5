"""Translation of provider errors into HTTP responses"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from xtreamtv.xtream.client import (
    AuthenticationError,
    CatalogFetchError,
    NotAuthenticatedError,
    XtreamError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES: dict[type[XtreamError], int] = {
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    CatalogFetchError: status.HTTP_502_BAD_GATEWAY,
    XtreamError: status.HTTP_502_BAD_GATEWAY,
}


async def _handle_xtream_error(request: Request, exc: XtreamError) -> JSONResponse:
    status_code = _STATUS_CODES.get(type(exc), status.HTTP_502_BAD_GATEWAY)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class in _STATUS_CODES:
        app.add_exception_handler(exc_class, _handle_xtream_error)
