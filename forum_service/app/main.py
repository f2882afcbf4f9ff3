"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from forum_service.app.exception_handlers import configure_exception_handlers
from forum_service.app.lifespan import lifespan
from forum_service.app.middleware import configure_middleware
from forum_service.app.router import setup_routers
from forum_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_app_settings()

    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )

    configure_exception_handlers(app)
    configure_middleware(app)
    setup_routers(app, settings)

    return app


# Application instance for uvicorn
app = create_app()
