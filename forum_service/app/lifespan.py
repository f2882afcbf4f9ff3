"""Application lifespan management.

Startup: logging, then the database (tables are created when configured).
Shutdown: reverse order.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from forum_service.core.settings import get_app_settings
from forum_service.infra.logging.config import setup_logging, shutdown

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    from forum_service.infra.database import close_database, init_database

    setup_logging()
    settings = get_app_settings()
    logger.info(
        "Application starting",
        extra={"service": settings.service_name, "version": settings.version},
    )

    await init_database()
    try:
        yield
    finally:
        await close_database()
        logger.info("Application stopped", extra={"service": settings.service_name})
        shutdown()
