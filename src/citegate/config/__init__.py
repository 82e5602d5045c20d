"""Runtime configuration for the validation engine."""

from .settings import Settings, settings  # noqa: F401
