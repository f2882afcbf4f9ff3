"""Logging configuration settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Structured logging configuration.

    Environment variables use LOG_ prefix.
    Example: LOG_LEVEL=DEBUG, LOG_JSON_LOGS=false
    """

    service_name: str = Field(
        default="forum-service",
        description="Service name to include in log records (static field in JSON)",
    )
    level: LogLevel = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Emit JSON Lines instead of text")
    use_queue: bool = Field(
        default=True,
        description="Write through a QueueListener thread (non-blocking handlers)",
    )
    sql_level: LogLevel = Field(
        default="WARNING",
        description="Level of the sqlalchemy.engine logger",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Return kwargs suitable for configure_logging(...)."""
        return {
            "service_name": self.service_name,
            "log_level": self.level,
            "json_logs": self.json_logs,
            "use_queue": self.use_queue,
            "loggers": {"sqlalchemy.engine": self.sql_level},
        }
