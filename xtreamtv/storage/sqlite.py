"""
SQLite-backed key-value store.

Uses an async SQLAlchemy engine over aiosqlite. A single table holds
string keys and string values.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, Text, delete, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from xtreamtv.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for storage tables."""


class KeyValueRecord(Base):
    """A single persisted key."""

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


def _get_async_url(url: str) -> str:
    """Convert sync database URL to async variant."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    return url


class SQLiteStore(KeyValueStore):
    """Key-value store persisted in a SQLite database.

    Usage:
        store = SQLiteStore("sqlite:///./xtreamtv.db")
        await store.initialize()
        await store.set("key", "value")
    """

    def __init__(self, url: str = "sqlite:///./xtreamtv.db", echo: bool = False):
        self.url = _get_async_url(url)
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    async def initialize(self) -> None:
        """Create the engine and the table."""
        if self._engine is not None:
            return

        # A single shared connection keeps in-memory databases alive
        self._engine = create_async_engine(
            self.url,
            echo=self.echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info(f"Key-value store ready at {self.url}")

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def _sessions(self) -> async_sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("SQLiteStore not initialized. Call initialize() first.")
        return self._session_factory

    async def get(self, key: str) -> Optional[str]:
        async with self._sessions()() as session:
            result = await session.execute(
                select(KeyValueRecord.value).where(KeyValueRecord.key == key)
            )
            return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        async with self._sessions()() as session:
            async with session.begin():
                await session.merge(KeyValueRecord(key=key, value=value))

    async def remove(self, key: str) -> None:
        async with self._sessions()() as session:
            async with session.begin():
                await session.execute(delete(KeyValueRecord).where(KeyValueRecord.key == key))

    async def remove_many(self, keys: list[str]) -> None:
        if not keys:
            return
        async with self._sessions()() as session:
            async with session.begin():
                await session.execute(
                    delete(KeyValueRecord).where(KeyValueRecord.key.in_(keys))
                )
