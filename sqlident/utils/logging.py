"""Logging helpers for sqlident.

All loggers live under the ``sqlident`` namespace and the library never
installs handlers. Events that describe an identifier (resolving a dialect,
binding or rejecting a value, compiling a statement) attach their details as
``extra_fields``, which :class:`StructuredFormatter` writes out as JSON keys.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from sqlident._serialization import encode_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = ("ROOT_LOGGER_NAME", "StructuredFormatter", "get_logger", "log_event")

ROOT_LOGGER_NAME = "sqlident"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the ``sqlident`` namespace.

    Args:
        name: Logger name, with or without the ``sqlident.`` prefix. If not
            provided, returns the package logger.

    Returns:
        The logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def log_event(logger: logging.Logger, level: int, message: str, *args: Any, **fields: Any) -> None:
    """Log ``message`` with ``fields`` attached to the record as ``extra_fields``.

    Nothing is formatted when ``level`` is disabled for ``logger``.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, *args, extra={"extra_fields": fields}, stacklevel=2)


class StructuredFormatter(logging.Formatter):
    """Render records as one JSON object per line.

    Keys from a record's ``extra_fields`` (dialect, parameter, reason, ...)
    are merged into the top level object.
    """

    def format(self, record: "LogRecord") -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", None) or {})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return encode_json(entry)
