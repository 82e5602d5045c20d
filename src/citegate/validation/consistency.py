"""Internal consistency checks on dates and creator names."""

from typing import List

from ..core.models import Citation
from ..core.normalization import PARTIAL_DATE_PATTERN, parse_partial_date
from .models import IssueCode, Severity, ValidationIssue

MIN_PLAUSIBLE_YEAR = 1800
MAX_PLAUSIBLE_YEAR = 2100

DATE_HINT = "Use YYYY, YYYY-MM or YYYY-MM-DD"


def check_date(
    citation: Citation,
    min_year: int = MIN_PLAUSIBLE_YEAR,
    max_year: int = MAX_PLAUSIBLE_YEAR,
) -> List[ValidationIssue]:
    if citation.date is None:
        return []
    date_str = citation.date
    parsed = parse_partial_date(date_str)
    if parsed is None:
        if PARTIAL_DATE_PATTERN.match(date_str):
            message = f"Invalid date '{date_str}': month or day out of range"
        else:
            message = f"Invalid date format '{date_str}'"
        return [
            ValidationIssue(
                severity=Severity.ERROR,
                field="date",
                message=message,
                suggestion=DATE_HINT,
                code=IssueCode.INVALID_DATE,
            )
        ]
    if not min_year <= parsed.year <= max_year:
        # Parseable but suspect; only a human or a source lookup can settle it.
        return [
            ValidationIssue(
                severity=Severity.WARNING,
                field="date",
                message=f"Unusual publication year {parsed.year}",
                suggestion=f"Confirm the year; expected between {min_year} and {max_year}",
                requires_exploration=True,
                code=IssueCode.IMPLAUSIBLE_YEAR,
            )
        ]
    return []


def check_creators(citation: Citation) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for position, creator in enumerate(citation.creators, start=1):
        if not creator.family_name.strip():
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    field="creators",
                    message=f"Invalid creator at position {position}: family name is blank",
                    suggestion="Give every creator a family name, or the full name of an organisation",
                    code=IssueCode.BLANK_FAMILY_NAME,
                )
            )
    return issues


def check_consistency(
    citation: Citation,
    min_year: int = MIN_PLAUSIBLE_YEAR,
    max_year: int = MAX_PLAUSIBLE_YEAR,
) -> List[ValidationIssue]:
    """Detect malformed or contradictory data, independent of presence."""
    return check_date(citation, min_year, max_year) + check_creators(citation)
