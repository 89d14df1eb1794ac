"""Tests for the structured logging system (timeverify_kernel/logging_config.py)."""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from timeverify_kernel.exceptions import FiscalYearInUseError
from timeverify_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "timeverify.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("computed", extra={"employee_count": 3, "week_start": "2025-10-05"})

        record = _parse_log(stream)
        assert record["employee_count"] == 3
        assert record["week_start"] == "2025-10-05"

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        LogContext.set(correlation_id="abc-123", fiscal_year="2026")
        get_logger("test").info("test_msg")

        record = _parse_log(stream)
        assert record["correlation_id"] == "abc-123"
        assert record["fiscal_year"] == "2026"

    def test_domain_exception_fields_extracted(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        try:
            raise FiscalYearInUseError(2026, 3)
        except FiscalYearInUseError:
            get_logger("test").error("delete_failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_code"] == "FISCAL_YEAR_IN_USE"
        assert record["exc_type"] == "FiscalYearInUseError"
        assert record["exc_fiscal_year"] == 2026
        assert record["exc_record_count"] == 3
        assert "traceback" in record

    def test_decimal_date_uuid_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        uid = uuid4()
        get_logger("test").info(
            "values",
            extra={"hours": Decimal("8.50"), "report_date": date(2025, 10, 6), "row_id": uid},
        )

        record = _parse_log(stream)
        assert record["hours"] == "8.50"
        assert record["report_date"] == "2025-10-06"
        assert record["row_id"] == str(uid)

    def test_debug_filtered_at_info(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("first")
        logger.warning("second", extra={"k": "v"})
        logger.debug("third")

        logs = _parse_all_logs(stream)
        assert [r["message"] for r in logs] == ["first", "second"]


# ---------------------------------------------------------------------------
# LogContext tests
# ---------------------------------------------------------------------------


class TestLogContext:
    def test_set_and_get(self):
        LogContext.set(correlation_id="x", employee_id="21000001")
        assert LogContext.get_all() == {"correlation_id": "x", "employee_id": "21000001"}

    def test_clear(self):
        LogContext.set(correlation_id="x")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_bind_restores_previous(self):
        LogContext.set(fiscal_year="2025")
        with LogContext.bind(fiscal_year="2026"):
            assert LogContext.get_all()["fiscal_year"] == "2026"
        assert LogContext.get_all()["fiscal_year"] == "2025"

    def test_bind_skips_none(self):
        with LogContext.bind(actor_id=None, employee_id="21000001"):
            assert LogContext.get_all() == {"employee_id": "21000001"}
        assert LogContext.get_all() == {}


# ---------------------------------------------------------------------------
# configure_logging tests
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    def test_idempotent(self):
        h1, _ = _make_handler()
        configure_logging(handler=h1)
        h2, _ = _make_handler()
        configure_logging(handler=h2)
        assert len(logging.getLogger("timeverify").handlers) == 1

    def test_get_logger_returns_child(self):
        assert get_logger("services.calendar").name == "timeverify.services.calendar"
