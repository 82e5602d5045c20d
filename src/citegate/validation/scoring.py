"""Certainty scoring.

The score is a weighted mix of three factors. Completeness dominates,
internal consistency follows, and persistent identifiers count least:

    score = 0.5 * structural + 0.3 * consistency + 0.2 * referential

``structural`` is the share of required fields present. ``consistency``
is ``1 - errors / (issues + 10)``; the constant keeps a single error from
collapsing the factor on a lightly checked record. ``referential`` starts
at 0.5 and gains 0.3 for a DOI, 0.2 for an ISBN and 0.1 for a URL, capped
at 1.0.
"""

from typing import Sequence

from ..core.models import Citation
from .models import Certainty, CertaintyFactors, Severity, ValidationIssue
from .structural import present_required_fields, required_fields

STRUCTURAL_WEIGHT = 0.5
CONSISTENCY_WEIGHT = 0.3
REFERENTIAL_WEIGHT = 0.2

CONSISTENCY_SMOOTHING = 10

REFERENTIAL_BASE = 0.5
DOI_BONUS = 0.3
ISBN_BONUS = 0.2
URL_BONUS = 0.1


def structural_factor(citation: Citation) -> float:
    required = required_fields(citation.kind)
    if not required:
        return 1.0
    return len(present_required_fields(citation)) / len(required)


def consistency_factor(issues: Sequence[ValidationIssue]) -> float:
    errors = sum(1 for i in issues if i.severity == Severity.ERROR)
    return 1.0 - errors / (len(issues) + CONSISTENCY_SMOOTHING)


def referential_factor(citation: Citation) -> float:
    value = REFERENTIAL_BASE
    if citation.doi is not None:
        value += DOI_BONUS
    if citation.isbn is not None:
        value += ISBN_BONUS
    if citation.url is not None:
        value += URL_BONUS
    return min(value, 1.0)


def _bucket(value: float, high: str, mid: str, low: str) -> str:
    if value >= 0.9:
        return high
    if value >= 0.7:
        return mid
    return low


def explain(factors: CertaintyFactors, exploration_count: int) -> str:
    parts = [
        _bucket(
            factors.structural,
            "all required fields are present",
            "most required fields are present",
            "several required fields are missing",
        ),
        _bucket(
            factors.consistency,
            "the data is internally consistent",
            "the data has minor consistency problems",
            "the data has serious consistency problems",
        ),
        _bucket(
            factors.referential,
            "persistent identifiers anchor the record well",
            "a persistent identifier is available",
            "no persistent identifier anchors the record",
        ),
    ]
    reasoning = f"Structurally, {parts[0]}; {parts[1]}; {parts[2]}."
    if exploration_count:
        noun = "issue requires" if exploration_count == 1 else "issues require"
        reasoning += f" {exploration_count} {noun} exploration beyond formal validation."
    return reasoning


def compute_certainty(citation: Citation, issues: Sequence[ValidationIssue]) -> Certainty:
    """Combine checker output into a Certainty value."""
    factors = CertaintyFactors(
        structural=structural_factor(citation),
        consistency=consistency_factor(issues),
        referential=referential_factor(citation),
    )
    score = round(
        STRUCTURAL_WEIGHT * factors.structural
        + CONSISTENCY_WEIGHT * factors.consistency
        + REFERENTIAL_WEIGHT * factors.referential,
        2,
    )
    assert 0.0 <= score <= 1.0, f"certainty score out of range: {score}"
    exploration_count = sum(1 for i in issues if i.requires_exploration)
    return Certainty(score=score, factors=factors, reasoning=explain(factors, exploration_count))
