"""
StackIt Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, declarative Base and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Transaction boundary:
    One request == one transaction. Services only `flush()`; the commit
    happens in `get_db_session` after the route handler returns. A question
    delete that removes answers, votes and tag counts therefore either
    lands completely or not at all.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from stackit.config import settings


def _engine_options(url: str) -> Dict[str, Any]:
    """
    Pool options for the configured backend.

    SQLite (used by the test-suite) runs on a static/null pool that rejects
    pool sizing arguments, so those are only passed for server databases.
    """
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if url.startswith("sqlite"):
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
    )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: response models are built from ORM objects after
# the flush; expiring them would trigger lazy loads outside the greenlet.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models register with this metadata, which Alembic reads for
    autogenerate and the test-suite uses for `create_all`.
    """
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (and to `get_current_user`,
           which FastAPI resolves with the same cached session)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/questions")
        async def list_questions(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            # Roll back for ANY failure, including permission errors raised
            # after a partial flush
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
