"""
Poker Study Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling on first use, provides a
       session dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system, and by
       the bootstrap to verify connectivity before the listener starts.
When:  Engine is created lazily (DATABASE_URL may be missing until the bootstrap
       has checked it); sessions are created per-request.
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    before_sleep_log,
    retry,
    stop_after_attempt,
    wait_exponential,
)

from pokerstudy.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models register with this metadata; Alembic and the test suite's
    create_all() both read it.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def get_engine() -> AsyncEngine:
    """
    Return the process-wide async engine, creating it on first call.

    SQLite (used by the test suite) does not accept queue-pool sizing
    arguments, so those are only passed for server databases.
    """
    global _engine, _session_factory
    if _engine is None:
        url = settings.database_url
        engine_kwargs = {"echo": settings.log_level == "DEBUG"}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        _engine = create_async_engine(url, **engine_kwargs)
        # expire_on_commit=False: response models read attributes after commit
        _session_factory = async_sessionmaker(
            _engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the process-wide engine."""
    get_engine()
    return _session_factory


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def ping_database() -> None:
    """Run `SELECT 1` against the engine. Raises whatever the driver raises."""
    async with get_engine().connect() as conn:
        await conn.execute(text("SELECT 1"))


async def verify_connection() -> None:
    """
    What:  Confirms the database is reachable, retrying with exponential backoff.
    When:  Called by the bootstrap before the HTTP listener starts.
    Raises: The last connection error once all attempts are exhausted.
    """
    attempt = retry(
        stop=stop_after_attempt(settings.db_connect_attempts),
        wait=wait_exponential(multiplier=1, max=settings.db_connect_max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )(ping_database)
    await attempt()
    logger.info("Connected to database")


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
