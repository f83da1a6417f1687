"""
Engine, session factory and transaction scopes.

Two ways to talk to the database:

* ``get_async_session()`` for single-statement reads; the connection is
  taken from the pool on first use and returned when the block exits.
* ``transaction()`` for multi-step writes; one connection, one
  transaction, committed on success and rolled back on any error.

Both translate driver, pool and connection failures into
``TransientStoreError``. asyncpg reports a refused socket as a plain
``OSError`` rather than a SQLAlchemy error.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from corphub.core.config import get_settings
from corphub.exceptions import TransientStoreError
from corphub.utils.logging import get_logger
from corphub.database.base import Base

logger = get_logger("database")


@lru_cache()
def get_engine() -> AsyncEngine:
    """Create the pooled async engine from settings (once per process)."""
    settings = get_settings()
    engine_kwargs = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
        "pool_recycle": settings.database_pool_recycle,
    }
    if not settings.database_url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
        )
    return create_async_engine(settings.database_url, **engine_kwargs)


@lru_cache()
def get_session_factory() -> async_sessionmaker:
    """Session factory bound to the shared engine."""
    return async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def get_async_session(
    session_factory: Optional[async_sessionmaker] = None,
) -> AsyncIterator[AsyncSession]:
    """Session for reads and single statements. Caller commits if it writes."""
    factory = session_factory or get_session_factory()
    async with factory() as session:
        try:
            yield session
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error: {e}")
            raise TransientStoreError("Database operation failed") from e


@asynccontextmanager
async def transaction(
    session_factory: Optional[async_sessionmaker] = None,
) -> AsyncIterator[AsyncSession]:
    """
    Transactional handle.

    Commits when the block exits normally, rolls back when it raises, and
    always releases the connection before returning to the caller.
    """
    factory = session_factory or get_session_factory()
    async with factory() as session:
        try:
            async with session.begin():
                yield session
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Transaction rolled back: {e}")
            raise TransientStoreError("Database transaction failed") from e


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a database session."""
    async with get_async_session() as session:
        yield session


async def ping(session_factory: Optional[async_sessionmaker] = None) -> bool:
    """Return True if the database answers a trivial query."""
    try:
        async with get_async_session(session_factory) as db:
            await db.execute(text("SELECT 1"))
        return True
    except TransientStoreError:
        return False


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """Create all tables. Intended for local development and tests."""
    # Import models so they register on the metadata
    from corphub.database import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def dispose_engine() -> None:
    """Close all pooled connections."""
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
        logger.info("Database engine disposed")
