"""
Structured logging configuration.

This module provides logging with support for:
- Correlation ID tracking
- Contextual fields (endpoint, method, status_code, etc.)
- Human-readable or JSON console output
- JSON error log file
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from worldcup_api.constants import MAX_LOG_LINE_BYTES
from worldcup_api.middlewares.correlation_id import get_correlation_id
from worldcup_api.settings import app_settings

# Context variables for storing request-specific logging context
log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# LogRecord attributes that are not user supplied "extra" fields
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
        "asctime",
    }
)


def set_log_context(**kwargs: Any) -> None:
    """
    Set contextual fields for structured logging.

    This allows adding fields like endpoint, method, etc. to all log
    messages within the current request context.

    Args:
        **kwargs: Key-value pairs to add to log context.

    Example:
        >>> set_log_context(endpoint="/players")
        >>> logger.info("Processing request")  # Will include endpoint
    """
    current = dict(log_context.get())
    current.update(kwargs)
    log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """
    Get current log context.

    Returns:
        Dictionary of contextual log fields.
    """
    return log_context.get()


def clear_log_context() -> None:
    """Clear the log context (useful at end of request)."""
    log_context.set({})


class StructuredJSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Fields: timestamp, level, logger, message, code location, environment,
    the request's correlation ID and log context, any ``extra=`` fields and
    the formatted exception. Lines longer than MAX_LOG_LINE_BYTES have
    their message truncated.
    """

    def _payload(self, record: logging.LogRecord) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "environment": app_settings.ENV.value,
        }

        request_id = get_correlation_id()
        if request_id:
            payload["request_id"] = request_id
        payload.update(get_log_context())

        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_KEYS
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return payload

    def format(self, record: logging.LogRecord) -> str:
        payload = self._payload(record)
        line = json.dumps(payload, default=str)
        if len(line) > MAX_LOG_LINE_BYTES:
            keep = MAX_LOG_LINE_BYTES - 1000
            payload["message"] = f"{payload['message'][:keep]}... [TRUNCATED]"
            line = json.dumps(payload, default=str)
        return line


class HumanReadableFormatter(logging.Formatter):
    """
    Console formatter for development.

    INFO lines stay short; every other level also names the code location,
    and request context fields are appended as ``key=value`` pairs.
    """

    DATE_FMT = "%Y-%m-%d %H:%M:%S"
    SHORT_FMT = "%(asctime)s - [%(correlation_id)s] %(levelname)s: %(message)s"
    LOCATED_FMT = (
        "%(asctime)s - [%(correlation_id)s] %(levelname)s: "
        "%(module)s.%(funcName)s:%(lineno)d - %(message)s"
    )

    def __init__(self) -> None:
        super().__init__(datefmt=self.DATE_FMT)
        self._short = logging.Formatter(self.SHORT_FMT, datefmt=self.DATE_FMT)
        self._located = logging.Formatter(
            self.LOCATED_FMT, datefmt=self.DATE_FMT
        )

    def format(self, record: logging.LogRecord) -> str:
        record.correlation_id = get_correlation_id() or "-"

        formatter = self._short if record.levelno == logging.INFO else self._located
        line = formatter.format(record)

        context = get_log_context()
        if context:
            fields = " ".join(f"{key}={value}" for key, value in context.items())
            line = f"{line} ({fields})"
        return line


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    if app_settings.LOG_CONSOLE_FORMAT == "json":
        handler.setFormatter(StructuredJSONFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())
    return handler


def _error_file_handler() -> logging.Handler | None:
    """JSON handler for ERROR and above, or None if the file can't be opened."""
    path = app_settings.LOG_FILE_PATH
    try:
        log_dir = os.path.dirname(path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(path)
    except OSError as e:
        logging.getLogger(__name__).warning(
            f"Error log file {path} unavailable: {e}"
        )
        return None
    handler.setLevel(logging.ERROR)
    handler.setFormatter(StructuredJSONFormatter())
    return handler


def setup_logging() -> logging.Logger:
    """
    Configure the root logger.

    Installs the console handler (human-readable or JSON, depending on
    LOG_CONSOLE_FORMAT) and the JSON error file handler. Records are
    suppressed entirely when running under the pytest command.

    Returns:
        The configured root logger.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, app_settings.LOG_LEVEL.upper()))
    root.handlers.clear()

    root.addHandler(_console_handler())
    file_handler = _error_file_handler()
    if file_handler is not None:
        root.addHandler(file_handler)

    if os.path.basename(sys.argv[0]) == "pytest":
        logging.disable(logging.ERROR)

    return root


logger = setup_logging()
