"""Console output helpers."""

from .report import render_report  # noqa: F401
