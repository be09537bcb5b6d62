"""
Database engines and sessions.

The async engine (asyncpg) serves requests; the sync engine (psycopg) is
only used by the schema bootstrap in create_tables. Both are built from
DatabaseSettings on first use, so importing this module never connects.

Dependencies: sqlalchemy, asyncpg, psycopg, visual_rag.configs
System role: Database connection lifecycle management
"""

import logging
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from visual_rag.configs import get_settings
from visual_rag.core.exceptions import StoreError

logger = logging.getLogger(__name__)


def _pool_options() -> dict:
    db = get_settings().database
    return {
        "echo": db.echo_sql,
        "pool_size": db.pool_size,
        "max_overflow": db.max_overflow,
        "pool_timeout": db.pool_timeout,
        "pool_pre_ping": True,
    }


def get_engine() -> Engine:
    """Sync engine for DDL and seeding."""
    return create_engine(get_settings().database.database_url, **_pool_options())


@lru_cache
def get_async_engine() -> AsyncEngine:
    """Process-wide async engine; one pool shared by every request."""
    return create_async_engine(get_settings().database.async_database_url, **_pool_options())


@lru_cache
def get_async_session_factory() -> async_sessionmaker:
    """
    Session factory bound to the shared engine.

    expire_on_commit=False keeps rows readable after get_async_db commits,
    which the response models rely on.
    """
    return async_sessionmaker(bind=get_async_engine(), autoflush=False, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session for FastAPI dependencies.

    Commits after the route returns and rolls back if it raised; services
    and CRUD classes only flush.

    Yields:
        AsyncSession: Session owned by the current request
    """
    async with get_async_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def ping_database() -> None:
    """
    Round-trip SELECT 1 and check the pgvector extension is installed.

    Raises:
        StoreError: Connection failed or the extension is missing
    """
    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
            installed = await conn.scalar(text("SELECT count(*) FROM pg_extension WHERE extname = 'vector'"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"{__name__}:ping_database - FAILED - {type(e).__name__}: {e}")
        raise StoreError("Database connection failed", operation="ping") from e
    if not installed:
        raise StoreError("pgvector extension is not installed", operation="ping")


async def dispose_engine() -> None:
    """Close pooled connections at shutdown; a later request builds a new engine."""
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
        get_async_session_factory.cache_clear()
        get_async_engine.cache_clear()
        logger.info(f"{__name__}:dispose_engine - Connection pool closed")
