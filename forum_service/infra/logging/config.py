"""Logging configuration setup.

- dictConfig for the root logger level and formatter definitions
- QueueHandler + QueueListener so request handlers never block on I/O
- ContextInjectingFilter for request-scoped fields
- JSONL or plain text output, chosen by settings
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import TYPE_CHECKING, Any

from forum_service.infra.logging.context import ContextInjectingFilter
from forum_service.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from forum_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

_listener: QueueListener | None = None
_queue_handler: QueueHandler | None = None
_LOGGING_INITIALIZED = False

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def shutdown() -> None:
    """Stop the QueueListener, flushing pending records."""
    global _listener, _queue_handler

    if _listener is not None:
        _listener.stop()
        _listener = None
    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional settings instance; loaded from the environment
            when omitted.
        force: Reconfigure even if logging was already initialized.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from forum_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**log_settings.to_logging_kwargs())
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    use_queue: bool = True,
    service_name: str = "forum-service",
    loggers: dict[str, str] | None = None,
) -> None:
    """Configure logging with dictConfig and the QueueHandler pattern.

    Args:
        log_level: Root logger level.
        json_logs: Emit JSONL instead of plain text.
        use_queue: Route records through a QueueListener thread. Disable in
            tests that inspect handlers synchronously.
        service_name: Static ``service`` field for JSON output.
        loggers: Per-logger level overrides, e.g. ``{"sqlalchemy.engine": "WARNING"}``.
    """
    global _listener, _queue_handler

    shutdown()

    formatter_name = "json" if json_logs else "text"
    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JSONFormatter,
                "static": {"service": service_name},
            },
            "text": {"format": TEXT_FORMAT, "datefmt": DATE_FORMAT},
        },
        "filters": {"context": {"()": ContextInjectingFilter}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter_name,
                "filters": ["context"],
            },
        },
        "loggers": {name: {"level": level.upper()} for name, level in (loggers or {}).items()},
        "root": {"level": log_level.upper(), "handlers": [] if use_queue else ["console"]},
    }
    logging.config.dictConfig(logging_config)

    if not use_queue:
        return

    console = logging.StreamHandler()
    console.setFormatter(
        JSONFormatter(static={"service": service_name})
        if json_logs
        else logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)
    )

    queue: Queue[logging.LogRecord] = Queue()
    _listener = QueueListener(queue, console, respect_handler_level=True)
    _listener.start()
    atexit.register(shutdown)

    # Context is read on the emitting task, before the record crosses threads
    _queue_handler = QueueHandler(queue)
    _queue_handler.addFilter(ContextInjectingFilter())
    logging.getLogger().addHandler(_queue_handler)
    logger.debug("Logging configured", extra={"json": json_logs, "level": log_level})


__all__ = ["configure_logging", "setup_logging", "shutdown"]
