# src/utils/logging.py
"""Structured logging with JSON format and operation tracking.

Provides:
- JSON-formatted log output for structured logging
- Current operation name via ContextVar, attached to every record
- Centralized logger configuration
"""

import json
import logging
from contextvars import ContextVar
from typing import Any

# Name of the trove operation in progress (e.g. "merge", "pick")
operation_var: ContextVar[str] = ContextVar("operation", default="")

# Record attributes passed through ``extra=`` that end up in the JSON output
EXTRA_FIELDS = ("command_name", "namespace", "trove_path")


def set_operation(operation: str) -> None:
    """Set the operation name for the current context.

    Args:
        operation: Name of the operation being performed.
    """
    operation_var.set(operation)


def get_operation() -> str:
    """Get the operation name for the current context.

    Returns:
        Current operation name, or empty string if not set.
    """
    return operation_var.get()


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Outputs log records as JSON with timestamp, level, logger name,
    message, the current operation and any known extra fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        operation = get_operation()
        if operation:
            log_data["operation"] = operation

        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = str(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance by name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def configure_structured_logging(level: int | str = logging.INFO) -> None:
    """Configure structured JSON logging for the application.

    Sets up a StreamHandler with StructuredFormatter and applies
    it to the root logger. Calling it again does not add a second handler.

    Args:
        level: Logging level, numeric or name (default: logging.INFO).
    """
    for handler in logging.root.handlers:
        if isinstance(handler.formatter, StructuredFormatter):
            break
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
        logging.root.addHandler(handler)
    logging.root.setLevel(level)
