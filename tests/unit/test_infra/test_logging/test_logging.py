"""Unit tests for structured logging: JSON output, context injection, lazy messages."""
from __future__ import annotations

import json
import logging
import sys

import pytest

from forum_service.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    configure_logging,
    get_lazy_logger,
    get_log_context,
    set_log_context,
    shutdown,
)


def _record(msg: str = "Search executed", **extra) -> logging.LogRecord:
    record = logging.LogRecord("forum", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


class TestJSONFormatter:
    def test_one_json_object_per_record(self):
        line = JSONFormatter(static={"service": "forum-service"}).format(
            _record(results_found=3, predicate="ALL")
        )

        data = json.loads(line)
        assert data["level"] == "INFO"
        assert data["message"] == "Search executed"
        assert data["service"] == "forum-service"
        assert data["results_found"] == 3
        assert data["predicate"] == "ALL"
        assert data["timestamp"].endswith("Z")
        assert "\n" not in line

    def test_exceptions_stay_on_one_line(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "forum", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        line = JSONFormatter().format(record)

        assert "\n" not in line
        assert "RuntimeError: boom" in json.loads(line)["exception"]

    def test_non_serialisable_extras_use_str(self):
        data = json.loads(JSONFormatter().format(_record(cursor={"id": object()})))

        assert "object object" in data["cursor"]["id"]


class TestLogContext:
    def test_filter_copies_context(self):
        set_log_context(request_id="abc-123")
        record = _record()

        assert ContextInjectingFilter().filter(record) is True
        assert record.request_id == "abc-123"

    def test_filter_never_overwrites_record_fields(self):
        set_log_context(request_id="from-context")
        record = _record(request_id="explicit")

        ContextInjectingFilter().filter(record)

        assert record.request_id == "explicit"

    def test_set_merges_and_clear_resets(self):
        set_log_context(request_id="a")
        set_log_context(path="/posts")

        assert get_log_context() == {"request_id": "a", "path": "/posts"}
        clear_log_context()
        assert get_log_context() == {}


class TestLazyLogger:
    def test_callable_not_evaluated_when_disabled(self):
        logger = get_lazy_logger("forum.lazy.disabled")
        logger.logger.setLevel(logging.INFO)
        calls = []

        logger.debug(lambda: calls.append("rendered") or "message")

        assert calls == []

    def test_callable_evaluated_when_enabled(self, caplog: pytest.LogCaptureFixture):
        logger = get_lazy_logger("forum.lazy.enabled")

        with caplog.at_level(logging.DEBUG, logger="forum.lazy.enabled"):
            logger.debug(lambda: "plan: limit=11")

        assert "plan: limit=11" in caplog.messages


class TestConfigureLogging:
    def test_without_queue_uses_console_handler(self):
        configure_logging(log_level="WARNING", json_logs=False, use_queue=False)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)

    def test_logger_overrides(self):
        configure_logging(use_queue=False, loggers={"sqlalchemy.engine": "ERROR"})

        assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR

    def test_queue_handler_carries_context_filter(self):
        from logging.handlers import QueueHandler

        configure_logging(use_queue=True)
        try:
            handlers = [h for h in logging.getLogger().handlers if isinstance(h, QueueHandler)]
            assert len(handlers) == 1
            assert any(isinstance(f, ContextInjectingFilter) for f in handlers[0].filters)
        finally:
            shutdown()
