"""Pydantic Settings v2 configuration.

Each domain has its own frozen settings model and env prefix:

- ``APP_``: application metadata and API prefix
- ``DB_``: database URL and startup behaviour
- ``LOG_``: logging level and format
- ``PAGINATION_``: per-endpoint page size profiles

Import settings via the cached loaders:
    from forum_service.core.settings import get_pagination_settings
"""

from __future__ import annotations

from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)

__all__ = [
    "clear_settings_cache",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
