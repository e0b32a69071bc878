"""
Structured JSON logger for the nodegroup tagging Lambda.

Provides CloudWatch Logs compatible JSON output with essential fields,
plus a helper that renders an exception as a structured error record.
"""

import logging
import json
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any


class JsonFormatter(logging.Formatter):
    """
    Custom formatter that outputs log records as JSON.

    Each log entry includes:
    - timestamp: ISO 8601 format with timezone
    - level: Log level name (INFO, ERROR, etc.)
    - name: Logger name
    - message: Log message
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()

        log_entry = {
            "timestamp": timestamp,
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra_fields") and record.extra_fields:
            log_entry.update(record.extra_fields)

        # Events may carry values json can't encode natively (datetimes, Decimals)
        return json.dumps(log_entry, default=str)


class StructuredLogger:
    """
    Wrapper around Python's logging.Logger with JSON output.

    Provides info, error and debug methods that take an optional dict of
    extra fields to merge into the JSON line.
    """

    def __init__(self, name: str, level: int = logging.INFO):
        """
        Initialize the structured logger.

        Args:
            name: Logger name (typically module name)
            level: Logging level (default: INFO)
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)

        # Only add handler if not already present (avoid duplicates on warm starts)
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(JsonFormatter())
            self._logger.addHandler(handler)

    def _prepare_extra(self, extra: dict[str, Any] | None) -> dict[str, Any]:
        """Prepare extra fields for logging."""
        if extra:
            return {"extra_fields": extra}
        return {}

    def info(self, msg: str, extra: dict[str, Any] | None = None) -> None:
        """
        Log an info message.

        Args:
            msg: Log message
            extra: Optional dict of additional fields to include in JSON output
        """
        self._logger.info(msg, extra=self._prepare_extra(extra))

    def error(self, msg: str, extra: dict[str, Any] | None = None) -> None:
        """
        Log an error message.

        Tracebacks are passed as a structured record in extra; see log_error.
        """
        self._logger.error(msg, extra=self._prepare_extra(extra))

    def debug(self, msg: str, extra: dict[str, Any] | None = None) -> None:
        """
        Log a debug message.

        Args:
            msg: Log message
            extra: Optional dict of additional fields to include in JSON output
        """
        self._logger.debug(msg, extra=self._prepare_extra(extra))


def setup_logger(
    name: str = "nodegroup_tags",
    level: int | None = None,
) -> StructuredLogger:
    """
    Create and configure a structured logger.

    Reads LOG_LEVEL from environment variable if level is not provided.

    Args:
        name: Logger name (default: "nodegroup_tags")
        level: Logging level (default: read from LOG_LEVEL env var, fallback to INFO)

    Returns:
        StructuredLogger instance ready to use

    Example:
        >>> logger = setup_logger("my-module")
        >>> logger.info("Tagging ASG", extra={"asg_name": "eks-ng-1234"})
        {"timestamp": "2025-12-10T10:00:00+00:00", "level": "INFO", ...}
    """
    if level is None:
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)

    return StructuredLogger(name, level)


def error_record(error: BaseException) -> dict[str, Any]:
    """
    Render an exception as a JSON-serializable record.

    Returns:
        Dictionary with the exception class name, its message and the
        formatted traceback split into lines.
    """
    stack = "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    )
    return {
        "name": type(error).__name__,
        "message": str(error),
        "stack": stack.splitlines(),
    }


def log_error(
    logger: StructuredLogger,
    error: BaseException,
    message: str,
    **extra: Any,
) -> None:
    """
    Log an exception as a structured error record.

    The resulting JSON line has the shape
    ``{"error": {"name", "message", "stack": [...]}, "message": ..., **extra}``.

    Args:
        logger: Logger to write to
        error: The exception being reported
        message: Human-readable summary
        **extra: Additional context fields (request id, cluster name, ...)
    """
    logger.error(message, extra={"error": error_record(error), **extra})
