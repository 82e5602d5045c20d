"""Required-field checks per citation kind."""

from typing import Dict, List, Tuple

from ..core.models import Citation, CitationKind
from .models import IssueCode, Severity, ValidationIssue

REQUIRED_FIELDS: Dict[CitationKind, Tuple[str, ...]] = {
    CitationKind.BOOK: ("title", "creators", "date", "publisher"),
    CitationKind.BOOK_SECTION: ("title", "creators", "venue", "date"),
    CitationKind.JOURNAL_ARTICLE: ("title", "creators", "venue", "date"),
    CitationKind.CONFERENCE_PAPER: ("title", "creators", "venue", "date"),
    CitationKind.THESIS: ("title", "creators", "date", "publisher"),
    CitationKind.WEBPAGE: ("title", "url", "date"),
    CitationKind.MANUSCRIPT: ("title", "creators"),
    CitationKind.REPORT: ("title", "creators", "date", "publisher"),
    CitationKind.PATENT: ("title", "creators", "date"),
}

FIELD_HINTS: Dict[str, str] = {
    "title": "Add the title of the work",
    "creators": "Add at least one author, editor or other creator",
    "date": "Add the publication date as YYYY, YYYY-MM or YYYY-MM-DD",
    "venue": "Add the journal, proceedings or book title the work appeared in",
    "publisher": "Add the publisher or issuing institution",
    "url": "Add the address the page was retrieved from",
}


def required_fields(kind: CitationKind) -> Tuple[str, ...]:
    return REQUIRED_FIELDS.get(kind, ())


def is_present(citation: Citation, field: str) -> bool:
    """Presence predicate for a single citation field."""
    value = getattr(citation, field)
    if field == "creators":
        return len(value) > 0
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def present_required_fields(citation: Citation) -> List[str]:
    return [f for f in required_fields(citation.kind) if is_present(citation, f)]


def check_structure(citation: Citation) -> List[ValidationIssue]:
    """Return one error per missing required field.

    A record with no creators or a blank title also gets its own error for
    that, whatever its kind requires, so such records carry both issues
    when the kind lists the field as required.
    """
    issues: List[ValidationIssue] = []
    for field in required_fields(citation.kind):
        if not is_present(citation, field):
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    field=field,
                    message=f"Missing required field '{field}' for {citation.kind.value}",
                    suggestion=FIELD_HINTS.get(field, f"Fill in the '{field}' field"),
                    code=IssueCode.MISSING_FIELD,
                )
            )

    if not citation.creators:
        issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                field="creators",
                message="No creators listed",
                suggestion=FIELD_HINTS["creators"],
                code=IssueCode.NO_CREATORS,
            )
        )
    if not citation.title.strip():
        issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                field="title",
                message="Title is blank",
                suggestion=FIELD_HINTS["title"],
                code=IssueCode.BLANK_TITLE,
            )
        )
    return issues
