"""
XtreamTV Main Application

FastAPI application and composition root. The lifespan builds the
key-value store, the Xtream client and the session, restores persisted
state, and hands the session to route handlers through app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from xtreamtv import __version__
from xtreamtv.api import api_router
from xtreamtv.api.errors import register_exception_handlers
from xtreamtv.config import XtreamTVConfig, get_config, load_config
from xtreamtv.session import XtreamSession
from xtreamtv.storage import StorageKeys, create_store
from xtreamtv.xtream.client import XtreamClient, XtreamError
from xtreamtv.xtream.models import XtreamCredentials

logger = logging.getLogger(__name__)


def build_session(config: XtreamTVConfig) -> XtreamSession:
    """Wire store, client and session from configuration."""
    store = create_store(
        backend=config.storage.backend,
        url=config.storage.url,
        echo=config.storage.echo,
    )
    client = XtreamClient(
        timeout=config.provider.timeout,
        user_agent=config.provider.user_agent,
    )
    return XtreamSession(
        client,
        store,
        ttl_ms=config.cache.ttl_ms,
        keys=StorageKeys(config.cache.key_prefix),
        rewarm_on_clear=config.cache.rewarm_on_clear,
    )


async def start_session(session: XtreamSession, config: XtreamTVConfig) -> None:
    """Open resources, restore persisted state and log in from config if needed."""
    await session.store.initialize()
    await session.client.open()

    restored = await session.restore()
    if restored or not config.provider.has_credentials:
        return

    try:
        await session.login(
            XtreamCredentials(
                username=config.provider.username,
                password=config.provider.password,
                server_url=config.provider.server_url,
            )
        )
    except XtreamError as e:
        logger.warning(f"Configured provider login failed (non-critical): {e}")


async def stop_session(session: XtreamSession) -> None:
    try:
        await session.client.aclose()
    except Exception as e:
        logger.warning(f"Error closing HTTP client: {e}")
    try:
        await session.store.close()
    except Exception as e:
        logger.warning(f"Error closing store: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown tasks:
    - Open the key-value store and HTTP client
    - Restore session and catalog caches
    - Close resources on shutdown
    """
    config: XtreamTVConfig = app.state.config
    session: XtreamSession = app.state.session

    logger.info(f"Starting XtreamTV v{__version__}")
    await start_session(session, config)
    logger.info("XtreamTV started successfully")

    yield

    logger.info("Shutting down XtreamTV")
    await stop_session(session)
    logger.info("XtreamTV shutdown complete")


def create_app(
    config: Optional[XtreamTVConfig] = None,
    session: Optional[XtreamSession] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Configuration to use. Defaults to the loaded global config.
        session: Prebuilt session. Built from config when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    config = config or get_config()

    app = FastAPI(
        title="XtreamTV",
        description="Xtream Codes catalog client with persistent catalog cache",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.config = config
    app.state.session = session or build_session(config)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


def main() -> None:
    """
    Main entry point for running the server.

    Called by the `xtreamtv` console script.
    """
    import uvicorn
    from xtreamtv.utils.logging_setup import parse_size, setup_logging

    config = load_config()

    setup_logging(
        log_level=config.logging.level,
        log_file_name=config.logging.file,
        log_to_console=True,
        log_to_file=True,
        max_bytes=parse_size(config.logging.max_size),
        backup_count=config.logging.backup_count,
        log_format=config.logging.format,
    )

    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_level=config.server.log_level.lower(),
    )


if __name__ == "__main__":
    main()
