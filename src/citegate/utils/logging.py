"""Structured logging configuration.

All citegate loggers hang off the ``citegate`` package logger, which owns
the single stdout handler. Format and level come from settings unless
``configure_logging`` is called with explicit values.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

from ..config.settings import settings

PACKAGE_LOGGER = "citegate"

_handler: Optional[logging.Handler] = None


class JSONFormatter(logging.Formatter):
    """Format logs as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "extra"):
            log_data.update(record.extra)  # type: ignore
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> logging.Logger:
    """(Re)build the package handler and return the package logger.

    Only the handler installed here is replaced; handlers attached by the
    host application stay in place.
    """
    global _handler
    log_format = log_format or settings.log_format
    level = level or settings.log_level

    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    package = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package.removeHandler(_handler)
    package.addHandler(handler)
    _handler = handler
    package.setLevel(getattr(logging, level.upper(), logging.INFO))
    package.propagate = False
    return package


def get_logger(name: str) -> logging.Logger:
    if _handler is None:
        configure_logging()
    return logging.getLogger(name)
