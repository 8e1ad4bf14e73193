"""
Agora Backend — Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
       Repositories never open their own connections; they receive the
       request's session explicitly.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy (PostgreSQL):
    pool_size:         Persistent connections for normal load
    max_overflow:      Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

SQLite:
    Used for local runs and the test-suite. Pool sizing arguments are not
    accepted by SQLite's pool, and foreign keys are off by default, so every
    new connection gets `PRAGMA foreign_keys=ON`.
"""

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine configured for the given URL.

    What:  Applies pool settings for server databases and the foreign-key
           pragma for SQLite.
    Who:   Called once below for the application engine, and by the test
           fixtures for a per-test database.
    """
    kwargs = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )

    new_engine = create_async_engine(database_url, **kwargs)

    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return new_engine


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.database_url)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, so response
# models can be built without another round-trip
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared metadata
    used by Alembic and by `create_all_tables()`.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction (saves changes)
        4. On error: rolls back the transaction (discards changes)
        5. Always: closes the session (returns connection to pool)

    A cascade delete or a like insert is therefore all-or-nothing: either
    the whole request commits or none of it does.

    Example usage in a route:
        @router.get("/posts")
        async def list_posts(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_all_tables(target: AsyncEngine = engine) -> None:
    """
    What:  Creates every table registered on Base.metadata that is missing.
    When:  On startup when DB_AUTO_CREATE is enabled, and in test fixtures.
    """
    # Models must be imported so their tables are registered on the metadata
    import app.models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
