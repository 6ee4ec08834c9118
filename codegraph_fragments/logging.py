"""
Logging for codegraph-fragments

The library only emits records; handlers are installed by the application
(the CLI calls ``setup_logger``). JSON output is available for log shippers.
"""

import json
import logging
import sys
from typing import Any

ROOT_LOGGER = "codegraph_fragments"


def setup_logger(
    name: str = ROOT_LOGGER,
    level: int | str = logging.WARNING,
    structured: bool = False,
) -> logging.Logger:
    """Setup logger with optional structured logging.

    Args:
        name: Logger name
        level: Logging level (number or name)
        structured: Use JSON structured logging

    Returns:
        Configured logger

    Example:
        logger = setup_logger(level="DEBUG")
        logger.debug("Fragment parsed", extra={"category": "Expr"})
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if structured:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    # Attributes every LogRecord carries; anything else came in via ``extra``.
    _RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in self._RESERVED:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


__all__ = [
    "setup_logger",
    "StructuredFormatter",
]
