"""Citation validation and certainty engine.

Validates bibliographic records against completeness and consistency
rules, scores how much each record can be trusted, and hands the residual
ambiguity of a batch to a downstream exploration stage.
"""

from .core.models import Citation, CitationKind, Creator, CreatorRole  # noqa: F401
from .errors import CitegateError, DuplicateCitationError, InvalidCitationError  # noqa: F401
from .handoff import UncertaintyAnalyzer, build_export, write_export  # noqa: F401
from .validation import (  # noqa: F401
    CitationValidator,
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationState,
    validate_citation,
)

__version__ = "0.1.0"
