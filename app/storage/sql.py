"""SQLAlchemy-backed key-value store (SQLite or PostgreSQL)."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.db.base import Base
from app.db.session import create_engine_for_url, create_session_maker
from app.models.kv_entry import KeyValueEntry
from app.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class SqlKeyValueStore(KeyValueStore):
    """Stores each key as one row of the kv_store table.

    The engine is created in start() and disposed in close(); nothing touches
    the database at construction time.
    """

    def __init__(self, database_url: str, create_tables: bool = True, echo: bool = False) -> None:
        self._database_url = database_url
        self._create_tables = create_tables
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    async def start(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_engine_for_url(self._database_url, echo=self._echo)
        self._session_maker = create_session_maker(self._engine)
        if self._create_tables:
            # Use Alembic in production; create_all keeps local SQLite setups zero-config
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Key-value store connected (%s)", self._engine.url.get_backend_name())

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None

    def _sessions(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            raise RuntimeError("SqlKeyValueStore used before start()")
        return self._session_maker

    async def get(self, key: str) -> str | None:
        async with self._sessions()() as session:
            result = await session.execute(
                select(KeyValueEntry.value).where(KeyValueEntry.key == key)
            )
            return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        async with self._sessions()() as session:
            try:
                entry = await session.get(KeyValueEntry, key)
                if entry:
                    entry.value = value
                else:
                    session.add(KeyValueEntry(key=key, value=value))
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def delete(self, key: str) -> None:
        async with self._sessions()() as session:
            try:
                await session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
                await session.commit()
            except Exception:
                await session.rollback()
                raise
