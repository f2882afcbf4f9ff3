"""Application settings for FastAPI configuration."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """FastAPI application settings.

    Environment variables use APP_ prefix.
    Example: APP_DEBUG=true, APP_API_PREFIX=/api/v2
    """

    service_name: str = Field(
        default="forum-service",
        min_length=1,
        max_length=100,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Service name for logging (lowercase, hyphens allowed)",
    )
    title: str = Field(default="Forum Service API", min_length=1, max_length=200)
    description: str = Field(
        default="Paginated, filterable listings of forum posts, comments and reports",
    )
    version: str = Field(
        default="1.0.0",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$",
        description="API version (semver format)",
    )
    debug: bool = Field(default=False, description="Enable FastAPI debug mode")
    api_prefix: str = Field(
        default="/api/v1",
        pattern=r"^(/[a-zA-Z0-9_-]+)*$",
        description="Prefix for all feature routers",
    )
    docs_enabled: bool = Field(default=True, description="Serve /docs and /openapi.json")

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
