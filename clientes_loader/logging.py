"""Logging configuration for clientes-loader.

Loader modules attach record context through the standard ``extra``
mechanism (``logger.warning(..., extra={"line_number": 12})``). The JSON
formatter emits those keys as top-level fields; the standard formatter
appends them to the message.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Context attributes set via ``extra=`` by the loader modules
CONTEXT_FIELDS = ("line_number", "field", "value", "attempt")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for clientes-loader.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        Format type: "standard" or "json".
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    formatter: logging.Formatter
    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = ContextFormatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("clientes_loader").setLevel(log_level)

    # Reduce noise from external libraries
    logging.getLogger("psycopg").setLevel(logging.WARNING)
    logging.getLogger("faker").setLevel(logging.WARNING)


class ContextFormatter(logging.Formatter):
    """Text formatter that appends record context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = _context(record)
        if not context:
            return text
        pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
        head, sep, tail = text.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)
