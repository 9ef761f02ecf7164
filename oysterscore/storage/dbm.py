"""
Database manager for oyster and review storage.

Any async SQLAlchemy URL works; SQLite via aiosqlite is the default and
what the test suite uses.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql.elements import ClauseElement, TextClause

from .schema import metadata

logger = logging.getLogger(__name__)


# Foreign keys are off by default in SQLite and the pragma is per connection.
def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any):
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def build_sqlite_url(path: str) -> str:
    return f"sqlite+aiosqlite:///{os.path.abspath(path)}"


class DBM:
    def __init__(self, url: str, *, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", set_sqlite_pragma)
        self.session_maker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_maker() as session:
            yield session

    async def initialize(self) -> None:
        """Create any missing tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logger.info({"event": "db_initialized", "url": self.engine.url.render_as_string(hide_password=True)})

    async def read(self, query: Any, params: dict | None = None) -> list[Any]:
        """Execute a read-only statement and return all rows as mappings."""
        if isinstance(query, str):
            raise TypeError("Raw SQL strings are disallowed. Use sqlalchemy.text().")
        if not isinstance(query, (TextClause, ClauseElement)):
            raise TypeError("Query must be a SQLAlchemy TextClause or ClauseElement.")

        async with self.session() as session:
            result: Result = await session.execute(query, params or {})
            return list(result.mappings().all())

    async def write(self, query: Any, params: dict | None = None) -> int:
        """Execute a write statement inside a transaction and return row count."""
        if isinstance(query, str):
            raise TypeError("Raw SQL strings are disallowed. Use sqlalchemy.text().")
        if not isinstance(query, (TextClause, ClauseElement)):
            raise TypeError("Query must be a SQLAlchemy TextClause or ClauseElement.")

        async with self.session() as session:
            async with session.begin():
                result: Result = await session.execute(query, params or {})
                return result.rowcount or 0

    async def dispose(self) -> None:
        await self.engine.dispose()


__all__ = ["DBM", "build_sqlite_url"]
