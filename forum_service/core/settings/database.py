"""Database settings."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Async SQLAlchemy connection settings.

    Environment variables use DB_ prefix; the URL also reads ``DATABASE_URL``.
    Example: DB_DATABASE_URL=postgresql+asyncpg://forum:secret@db/forum
    """

    database_url: str = Field(
        default="sqlite+aiosqlite:///./forum.db",
        validation_alias=AliasChoices("DB_DATABASE_URL", "DATABASE_URL"),
        description="SQLAlchemy async URL",
    )
    echo: bool = Field(default=False, description="Log every SQL statement")
    pool_pre_ping: bool = Field(default=True)
    create_tables_on_startup: bool = Field(
        default=True,
        description="Run metadata.create_all() during application startup",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")
