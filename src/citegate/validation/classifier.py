"""Map an issue set to a validation state."""

from typing import Sequence

from .models import Severity, ValidationIssue, ValidationState

MISMATCH_KEYWORDS = ("invalid", "inconsistent")


def classify(issues: Sequence[ValidationIssue]) -> ValidationState:
    """Rules, first match wins:

    1. any error: INCONSISTENT if an error message reports a mismatch,
       otherwise INCOMPLETE
    2. any issue flagged for exploration: UNCERTAIN
    3. otherwise VALID
    """
    errors = [i for i in issues if i.severity == Severity.ERROR]
    if errors:
        if any(kw in e.message.lower() for e in errors for kw in MISMATCH_KEYWORDS):
            return ValidationState.INCONSISTENT
        return ValidationState.INCOMPLETE
    if any(i.requires_exploration for i in issues):
        return ValidationState.UNCERTAIN
    return ValidationState.VALID
