"""
Cheese Catalog Backend — Database Engine & Sessions
=====================================================

What:  Async SQLAlchemy engine, session factory and declarative base.
How:   One engine per process with connection pooling; the repository layer
       opens a short-lived session from `async_session_factory` per call.
Who:   Used by the repositories, Alembic (`Base.metadata`) and the app lifespan.
When:  Engine is created at module import; sessions are created per store call.

Connection Pooling:
    pool_size / max_overflow come from settings for server databases.
    pool_pre_ping validates a pooled connection before it is handed out.
    pool_recycle=3600 drops connections older than an hour.
    SQLite (used for local runs and tests) keeps SQLAlchemy's default pool.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from cheese_api.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Pool options are only passed to server databases; the SQLite dialects
    reject or ignore them.
    """
    options: Dict[str, Any] = {
        # Echo SQL only when debugging; it is very noisy otherwise
        "echo": settings.log_level == "DEBUG",
    }
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned records stay readable after the
    # session that loaded them has been closed
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with `Base.metadata`, which Alembic reads for
    autogenerate and `create_tables()` uses for local setups.
    """
    pass


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(bind: AsyncEngine = engine) -> None:
    """
    What:  Creates any missing tables from the ORM metadata.
    When:  At startup when settings.db_create_tables is set, and in tests.
    """
    # Import models so they are registered on Base.metadata
    from cheese_api.models import cheese  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(bind: AsyncEngine = engine) -> None:
    """
    What:  Closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await bind.dispose()
