"""Async engine and session lifecycle for the template/content store.

The engine is created lazily from ``Settings.database_url``. Switching to a
different URL requires ``close_db()`` first, so an open pool is never
abandoned undisposed.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from template_guard.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


_engine: AsyncEngine | None = None
_engine_url: str | None = None
_async_session_maker: async_sessionmaker[AsyncSession] | None = None


def _engine_options(settings: Settings) -> dict:
    options: dict = {
        "echo": settings.log_level == "DEBUG",
        "pool_pre_ping": True,
    }
    # Pool sizing only applies to server databases; SQLite rejects it.
    if not settings.database_url.startswith("sqlite"):
        options.update(pool_size=10, max_overflow=20)
    return options


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Return the shared engine, creating it on first use.

    Args:
        settings: Optional settings. If None, uses global settings.

    Returns:
        The async SQLAlchemy engine for ``settings.database_url``.

    Raises:
        RuntimeError: If an engine is already open for a different URL.
    """
    global _engine, _engine_url

    settings = settings or get_settings()

    if _engine is not None and _engine_url == settings.database_url:
        return _engine

    if _engine is not None:
        logger.error(f"Engine already open for {_engine_url}, refusing to switch database URL")
        raise RuntimeError(
            "A database engine is already open for another URL; await close_db() before switching"
        )

    try:
        _engine = create_async_engine(settings.database_url, **_engine_options(settings))
        _engine_url = settings.database_url
    except Exception as e:
        logger.error(f"Failed to create database engine: {e}", exc_info=True)
        raise

    logger.info(f"Database engine ready: {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def get_session_maker(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the shared engine."""
    global _async_session_maker

    engine = get_engine(settings)
    if _async_session_maker is None:
        _async_session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _async_session_maker


async def get_async_session(settings: Settings | None = None) -> AsyncGenerator[AsyncSession, None]:
    """Yield a read session for one request.

    Nothing is ever committed through it. A database error rolls back the
    implicit transaction opened by the reads and is re-raised.

    Args:
        settings: Optional settings. If None, uses global settings.

    Yields:
        An async database session.
    """
    session_maker = get_session_maker(settings)
    async with session_maker() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            logger.error(f"Database error while reading templates: {e}", exc_info=True)
            await session.rollback()
            raise


async def create_all_tables(settings: Settings | None = None) -> None:
    """Create the template and content tables if they are missing.

    For local development and tests only. In production the tables belong
    to the editing application.

    Args:
        settings: Optional settings. If None, uses global settings.
    """
    # Registers the tables on SQLModel.metadata
    from template_guard.db import models  # noqa: F401

    engine = get_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create tables: {e}", exc_info=True)
        raise

    logger.info(f"Tables ready: {', '.join(sorted(SQLModel.metadata.tables))}")


async def close_db() -> None:
    """Dispose of the shared engine, if one was created."""
    global _engine, _engine_url, _async_session_maker

    if _engine is None:
        return

    try:
        await _engine.dispose()
    except Exception as e:
        logger.error(f"Error closing database engine: {e}", exc_info=True)
        raise
    finally:
        _engine = None
        _engine_url = None
        _async_session_maker = None

    logger.info("Database engine closed")
