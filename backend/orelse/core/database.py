"""Database configuration and session management.

The engine and session factory are process-wide: they are created on first
use and reused by every request until :func:`dispose_engine` is called at
shutdown.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from orelse.core.config import settings
from orelse.core.exceptions import OrElseError

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options(url: str) -> dict:
    options = {
        "echo": settings.DEBUG,  # Only log SQL in debug mode
        "pool_pre_ping": True,  # Verify connections before use
    }
    # SQLite uses a single-connection pool that takes no sizing arguments
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_timeout=30,  # Wait max 30s for a connection
        )
    return options


def get_engine() -> AsyncEngine:
    """Return the shared engine, creating it on first call."""
    global _engine
    if _engine is None:
        url = settings.DATABASE_URL
        _engine = create_async_engine(url, **_engine_options(url))
        logger.info("Database engine initialised", extra={"dialect": _engine.dialect.name})
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the shared session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections and forget the shared engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except (HTTPException, OrElseError):
            # Expected request failures, not DB errors
            await session.rollback()
            raise
        except Exception as e:
            logger.error(f"Database error, rolling back: {type(e).__name__}: {e}")
            await session.rollback()
            raise
