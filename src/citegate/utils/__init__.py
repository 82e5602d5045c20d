"""Shared utilities."""

from .logging import configure_logging, get_logger  # noqa: F401
