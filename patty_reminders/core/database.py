import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from ..models.base import Base
from .config import get_settings

logger = logging.getLogger(__name__)

# Global variables for database connection
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_database_url() -> str:
    """Get database URL from settings (PATTY_DATABASE_URL overrides)."""
    return get_settings().database_url


async def init_database(database_url: Optional[str] = None) -> None:
    """Initialize database connection and create tables"""
    global _engine, _session_factory

    database_url = database_url or get_database_url()
    logger.info(f"Initializing database: {database_url}")

    engine_kwargs = {"echo": False}
    if "sqlite" in database_url:
        engine_kwargs["poolclass"] = NullPool
    else:
        engine_kwargs["pool_pre_ping"] = True

    _engine = create_async_engine(database_url, **engine_kwargs)

    _session_factory = async_sessionmaker(
        _engine, class_=AsyncSession, expire_on_commit=False
    )

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified")


async def close_database() -> None:
    """Close database connection"""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        logger.info("Database connection closed")
    _engine = None
    _session_factory = None


async def get_session_factory() -> async_sessionmaker:
    """Return the session factory, initializing the database on first use."""
    if _session_factory is None:
        await init_database()
    assert _session_factory is not None
    return _session_factory


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session context manager"""
    factory = await get_session_factory()

    async with factory() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise


async def health_check() -> bool:
    """Check if database is accessible"""
    try:
        async with get_db_session() as session:
            result = await session.execute(text("SELECT 1"))
            is_healthy = result.scalar() == 1
            if not is_healthy:
                logger.warning("Database health check query returned unexpected value")
            return is_healthy
    except Exception as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return False
