"""Structured logging: lazy debug messages, request context, JSONL output."""

from forum_service.infra.logging.config import configure_logging, setup_logging, shutdown
from forum_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from forum_service.infra.logging.formatters import JSONFormatter
from forum_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
