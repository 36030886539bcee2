"""Testes de config.logging (configure_logging, filter, formatter JSON)."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "message") -> logging.LogRecord:
    return logging.LogRecord(
        name="app.services.email_validation",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [("INFO", logging.INFO), ("debug", logging.DEBUG), ("Warning", logging.WARNING)],
    )
    def test_sets_root_level(self, level: str, expected: int) -> None:
        configure_logging(level=level)

        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="LOUD")

    def test_replaces_existing_handlers_with_single_json_handler(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(correlation_id_getter=lambda: "cid")

        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "email_validator"


def test_get_logger_returns_named_logger() -> None:
    logger = get_logger("app.test")

    assert logger is logging.getLogger("app.test")


class TestLogFallback:
    def test_minimal_call(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "known_valid_lookup")

        args, kwargs = logger.info.call_args
        assert args == ("Fallback applied for %s", "known_valid_lookup")
        assert kwargs["extra"] == {"fallback_used": True, "component": "known_valid_lookup"}

    def test_reason_and_elapsed(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "validation_log_write", reason="StorageError", elapsed_ms=1.5)

        extra = logger.info.call_args[1]["extra"]
        assert extra["reason"] == "StorageError"
        assert extra["elapsed_ms"] == 1.5


class TestCorrelationIdFilter:
    def test_injects_correlation_id_and_service(self) -> None:
        record = _record()

        assert CorrelationIdFilter("email_validator", lambda: "corr-1").filter(record) is True
        assert record.correlation_id == "corr-1"
        assert record.service == "email_validator"

    def test_explicit_correlation_id_wins(self) -> None:
        record = _record()
        record.correlation_id = "explicit"

        CorrelationIdFilter("svc", lambda: "from-getter").filter(record)

        assert record.correlation_id == "explicit"

    def test_without_getter_uses_empty_string(self) -> None:
        record = _record()

        CorrelationIdFilter("svc").filter(record)

        assert record.correlation_id == ""


class TestJsonFormatter:
    def test_field_constants(self) -> None:
        assert set(REQUIRED_LOG_FIELDS) == {
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        }
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_output_is_json_with_renamed_fields_and_extras(self) -> None:
        record = _record("email_validated")
        record.correlation_id = "abc-123"
        record.service = "email_validator"
        record.status = "valid"

        payload = json.loads(create_json_formatter().format(record))

        assert payload["message"] == "email_validated"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.services.email_validation"
        assert payload["correlation_id"] == "abc-123"
        assert payload["service"] == "email_validator"
        assert payload["status"] == "valid"
