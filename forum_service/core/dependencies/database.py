"""Database dependencies for FastAPI route handlers.

Route handlers take a request-scoped session with ``SessionDep``; scripts and
background code use ``infra.database.get_async_session()`` directly. Both
share one session factory.

Usage:
    @router.get("/items")
    async def list_items(session: SessionDep):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forum_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_db_session)]

__all__ = ["SessionDep", "get_db_session"]
