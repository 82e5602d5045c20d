"""Per-record validation: rule checkers, certainty scoring, classification.

Three pure checkers look at a citation from different angles: required
fields for its kind, internal consistency of dates and creator names, and
the format of its persistent identifiers. Their combined issues decide the
record's state and feed the weighted certainty score.
"""

from .classifier import classify  # noqa: F401
from .engine import CitationValidator, validate_citation  # noqa: F401
from .models import (  # noqa: F401
    Certainty,
    CertaintyFactors,
    IssueCode,
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationState,
)
from .scoring import compute_certainty  # noqa: F401
