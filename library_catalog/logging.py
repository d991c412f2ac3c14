"""
Logger setup for the catalog.

Every record carries the request's correlation id when one is set. Fields
pushed with ``set_log_context`` (for example the running command) are
merged into JSON records. Console output is either a one-line text format
or JSON; errors are also appended to a JSON log file.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar, Token
from typing import Any

from library_catalog.constants import MAX_LOG_SIZE_BYTES
from library_catalog.settings import app_settings

log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# LogRecord attributes that are not copied into the JSON payload
_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
        "correlation_id",
    }
)

_DATE_FMT = "%Y-%m-%d %H:%M:%S"


def get_correlation_id() -> str:
    """Correlation id of the current request, or an empty string."""
    from library_catalog.middlewares.correlation_id import (
        get_correlation_id as _get_cid,
    )

    return _get_cid()


def set_log_context(**kwargs: Any) -> Token[dict[str, Any]]:
    """
    Add fields to every JSON record logged from the current context.

    The stored dict is copied, never mutated, so fields set inside one task
    do not leak into another.

    Returns:
        Token for ``reset_log_context``, which restores the previous fields.

    Example:
        >>> token = set_log_context(command="DeleteAuthorCommand")
        >>> logger.info("Deleted author 1")  # record includes "command"
        >>> reset_log_context(token)
    """
    return log_context.set({**log_context.get(), **kwargs})


def reset_log_context(token: Token[dict[str, Any]]) -> None:
    log_context.reset(token)


def get_log_context() -> dict[str, Any]:
    return log_context.get()


class StructuredJSONFormatter(logging.Formatter):
    """
    Renders a record as a single JSON object.

    Keys: timestamp, level, logger, message, module, function, line and
    environment. ``request_id`` is added inside a request. Log context
    fields, ``extra=`` fields and a formatted ``exception`` are added when
    present. Oversized messages are cut to fit MAX_LOG_SIZE_BYTES.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_data["request_id"] = correlation_id

        log_data.update(get_log_context())
        log_data["environment"] = app_settings.ENV.value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = value

        json_str = json.dumps(log_data, default=str)
        if len(json_str) > MAX_LOG_SIZE_BYTES:
            log_data["message"] = (
                log_data["message"][: MAX_LOG_SIZE_BYTES - 1000]
                + "... [TRUNCATED]"
            )
            json_str = json.dumps(log_data, default=str)

        return json_str


class HumanReadableFormatter(logging.Formatter):
    """
    Text console format with the correlation id in brackets.

    INFO records show only the message. Every other level also shows
    ``module.function:line``.
    """

    INFO_FMT = "%(asctime)s - [%(correlation_id)s] %(levelname)s: %(message)s"
    DETAILED_FMT = "%(asctime)s - [%(correlation_id)s] %(levelname)s: %(module)s.%(funcName)s:%(lineno)d - %(message)s"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._info = logging.Formatter(self.INFO_FMT, datefmt=_DATE_FMT)
        self._detailed = logging.Formatter(self.DETAILED_FMT, datefmt=_DATE_FMT)

    def format(self, record: logging.LogRecord) -> str:
        record.correlation_id = get_correlation_id() or "-"

        if record.levelno == logging.INFO:
            return self._info.format(record)
        return self._detailed.format(record)


def setup_logging() -> logging.Logger:
    """
    Build the ``library_catalog`` logger from ``app_settings.logging``.

    Handlers are replaced on each call: stdout at every level (text or JSON
    per LOG_CONSOLE_FORMAT) and a JSON file handler for ERROR and above.
    If the log file cannot be opened, console logging still works and a
    warning says why.
    """
    logging_settings = app_settings.logging

    logger = logging.getLogger("library_catalog")
    logger.setLevel(getattr(logging, logging_settings.LEVEL.upper()))
    logger.propagate = False
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    if logging_settings.CONSOLE_FORMAT == "json":
        console_handler.setFormatter(StructuredJSONFormatter())
    else:
        console_handler.setFormatter(HumanReadableFormatter())
    logger.addHandler(console_handler)

    try:
        log_dir = os.path.dirname(logging_settings.FILE_PATH)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(logging_settings.FILE_PATH)
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(StructuredJSONFormatter())
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"Could not create file handler: {e}")

    return logger


logger = setup_logging()
