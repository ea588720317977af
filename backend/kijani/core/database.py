"""
Async database engine, session factory, and ORM base.

Rules enforced:
  • Every DB call goes through AsyncSession.
  • Sessions are request-scoped via FastAPI's Depends(get_db_session).
  • The engine is owned by a Database object built from Settings and
    stored on app.state; nothing here is created at import time.
  • Schema is synced at startup: create missing tables, then add any model
    columns that an existing table lacks.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import Column, DefaultClause, inspect, text
from sqlalchemy.engine import Connection, Dialect
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from kijani.core.config import Settings

logger = logging.getLogger(__name__)


# ── ORM Base ────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Shared declarative base for all SQLAlchemy models."""


# ── Engine + session factory ────────────────────────────────
class Database:
    """Engine and session factory for one application instance."""

    def __init__(self, settings: Settings) -> None:
        # pool_pre_ping: drop stale connections before reuse
        # echo: SQL logging, debug mode only
        self.engine: AsyncEngine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_pre_ping=True,
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # avoid lazy-load issues after commit
        )

    async def ping(self) -> None:
        """Fail loudly if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def sync_schema(self) -> list[str]:
        """Create missing tables and columns. Returns the columns added."""
        # Register every model on Base.metadata before create_all.
        from kijani.models import project, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            return await conn.run_sync(_add_missing_columns)

    async def dispose(self) -> None:
        await self.engine.dispose()


def _add_missing_columns(connection: Connection) -> list[str]:
    """
    ALTER existing tables so they carry every mapped column.

    Added columns are always nullable, since a NOT NULL column without a
    default cannot be added to a populated table. Rows that predate the
    column are then backfilled from its server default. The backfill is a
    separate UPDATE because SQLite refuses non-constant defaults such as
    CURRENT_TIMESTAMP in ADD COLUMN.
    """
    inspector = inspect(connection)
    existing_tables = set(inspector.get_table_names())
    added: list[str] = []

    for table in Base.metadata.sorted_tables:
        if table.name not in existing_tables:
            continue

        existing_columns = {col["name"] for col in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in existing_columns:
                continue

            column_type = column.type.compile(dialect=connection.dialect)
            connection.execute(
                text(f'ALTER TABLE {table.name} ADD COLUMN "{column.name}" {column_type}')
            )
            logger.warning("Added missing column %s.%s (%s)", table.name, column.name, column_type)

            default_sql = _server_default_sql(column, connection.dialect)
            if default_sql is not None:
                connection.execute(
                    text(
                        f'UPDATE {table.name} SET "{column.name}" = {default_sql} '
                        f'WHERE "{column.name}" IS NULL'
                    )
                )
            added.append(f"{table.name}.{column.name}")

    return added


def _server_default_sql(column: Column, dialect: Dialect) -> str | None:
    """SQL for a column's server default, or None when it has none."""
    default = column.server_default
    if not isinstance(default, DefaultClause):
        return None

    arg = default.arg
    if isinstance(arg, str):
        return "'" + arg.replace("'", "''") + "'"
    return str(arg.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))


# ── Dependency ──────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a scoped async session for one request.

    The session is committed by the caller (router/service);
    this generator only guarantees cleanup on exit.
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
