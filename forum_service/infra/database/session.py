"""Async engine and session factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from forum_service.core.database.base import Base
from forum_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

db_settings = get_db_settings()

engine = create_async_engine(
    db_settings.database_url,
    echo=db_settings.echo or get_app_settings().debug,
    pool_pre_ping=db_settings.pool_pre_ping,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield a session, rolling back if the block raises.

    Example:
        async with get_async_session() as session:
            await repo.fetch_page(session, query)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_database() -> None:
    """Create all tables when configured to (local and test setups)."""
    if not db_settings.create_tables_on_startup:
        return
    # Import models so they register on Base.metadata
    import forum_service.features.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"sqlite": db_settings.is_sqlite})


async def close_database() -> None:
    await engine.dispose()
    logger.info("Database engine disposed")
