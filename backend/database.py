"""
Database connection: async SQLite by default, PostgreSQL when configured.

Env vars (set in the environment or .env):
    DATABASE_URL          -- full postgres:// connection string (optional)
    DATABASE_URL_FALLBACK -- defaults to sqlite+aiosqlite:///./companies.db
"""

from __future__ import annotations

import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

import config_env

logger = logging.getLogger(__name__)

_raw_url = config_env.DATABASE_URL

if _raw_url:
    # asyncpg needs postgresql+asyncpg://
    if _raw_url.startswith("postgres://"):
        _raw_url = _raw_url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif _raw_url.startswith("postgresql://"):
        _raw_url = _raw_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    DATABASE_URL = _raw_url
else:
    DATABASE_URL = config_env.DATABASE_URL_FALLBACK


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement (and ON DELETE CASCADE) for every SQLite connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(DATABASE_URL, echo=False)
enable_sqlite_foreign_keys(engine)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def init_db(bind: AsyncEngine | None = None):
    """Create all tables (safe to call multiple times)."""
    # models must be imported so their tables are registered on Base.metadata
    from backend import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready (%s)", (bind or engine).dialect.name)


async def get_session() -> AsyncSession:
    async with async_session() as session:
        yield session
