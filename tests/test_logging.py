"""Tests for structured logging functionality."""

import json
import logging

from library_catalog.logging import (
    HumanReadableFormatter,
    StructuredJSONFormatter,
    get_log_context,
    reset_log_context,
    set_log_context,
)
from library_catalog.middlewares.correlation_id import correlation_id


def make_record(msg: str = "Created author 1", level: int = logging.INFO):
    return logging.LogRecord(
        name="library_catalog",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestLogContext:
    """Test log context management."""

    def test_set_and_reset_context(self):
        outer = set_log_context(entity="author")
        inner = set_log_context(entity_id=1)

        assert get_log_context() == {"entity": "author", "entity_id": 1}

        reset_log_context(inner)
        assert get_log_context() == {"entity": "author"}

        reset_log_context(outer)
        assert get_log_context() == {}


class TestStructuredJSONFormatter:
    """Test JSON log output."""

    def test_includes_context_and_extra_fields(self):
        token = set_log_context(entity="book")
        record = make_record()
        record.exception_type = "NotFoundError"
        try:
            data = json.loads(StructuredJSONFormatter().format(record))
        finally:
            reset_log_context(token)

        assert data["message"] == "Created author 1"
        assert data["level"] == "INFO"
        assert data["entity"] == "book"
        assert data["exception_type"] == "NotFoundError"

    def test_includes_correlation_id(self):
        token = correlation_id.set("abc12345")
        try:
            data = json.loads(StructuredJSONFormatter().format(make_record()))
        finally:
            correlation_id.reset(token)

        assert data["request_id"] == "abc12345"


class TestHumanReadableFormatter:
    """Test console log output."""

    def test_placeholder_without_correlation_id(self):
        output = HumanReadableFormatter().format(make_record())

        assert "[-] INFO: Created author 1" in output

    def test_warning_includes_location(self):
        output = HumanReadableFormatter().format(
            make_record("Author with ID 7 was not found.", logging.WARNING)
        )

        assert "WARNING: test_logging." in output
        assert output.endswith(":10 - Author with ID 7 was not found.")
