"""Citation model and identifier/text normalization helpers."""

from .models import Citation, CitationKind, Creator, CreatorRole  # noqa: F401
