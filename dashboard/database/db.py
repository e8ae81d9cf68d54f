"""Async database connection and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from dashboard.core.config import get_config, normalize_database_url, split_ssl_mode

logger = logging.getLogger(__name__)

config = get_config()
DATABASE_URL = config.DATABASE_URL


class Base(DeclarativeBase):
    """Declarative base for the dashboard tables."""


def _build_engine(database_url: str, ssl_mode: str | None = None) -> AsyncEngine:
    if database_url.startswith("sqlite"):
        # aiosqlite connections are bound to the loop that opened them.
        return create_async_engine(database_url, echo=config.DEBUG, poolclass=NullPool)
    return create_async_engine(
        database_url,
        echo=config.DEBUG,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        connect_args={"ssl": ssl_mode or config.DATABASE_SSL},
    )


def _configure_engine(database_url: str) -> None:
    global DATABASE_URL, engine, SessionLocal
    _, ssl_mode = split_ssl_mode(database_url)
    DATABASE_URL = normalize_database_url(database_url)
    engine = _build_engine(DATABASE_URL, ssl_mode)
    SessionLocal = async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


_configure_engine(DATABASE_URL)


def get_engine() -> AsyncEngine:
    """Return the active SQLAlchemy engine."""
    return engine


def get_active_database_url() -> str:
    """Return the currently bound database URL."""
    return DATABASE_URL


def reset_engine(database_url: str | None = None) -> None:
    """Rebind engine/sessionmaker to the given URL (or current active URL)."""
    _configure_engine(database_url or DATABASE_URL)


async def dispose_engine() -> None:
    await engine.dispose()


@asynccontextmanager
async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Context-manager wrapper for safe DB session lifecycle."""
    session = SessionLocal()
    try:
        yield session
    finally:
        await session.close()


async def verify_database_connection() -> bool:
    """Verify DB connectivity during startup."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError):
        logger.exception("database.connection_failed", extra={"event": "database.connection_failed"})
        return False
