"""Persistent identifier format checks.

Identifiers are never dereferenced. Every issue raised here is a warning
flagged for exploration: a malformed or missing identifier is something to
look into, not a reason to reject the record.
"""

from typing import List

from ..core.ids import is_http_url, is_valid_doi, is_valid_isbn, is_valid_issn
from ..core.models import Citation, CitationKind
from .models import IssueCode, Severity, ValidationIssue

IDENTIFIER_OPTIONAL_KINDS = frozenset({CitationKind.MANUSCRIPT})


def _warning(field: str, message: str, suggestion: str, code: IssueCode) -> ValidationIssue:
    return ValidationIssue(
        severity=Severity.WARNING,
        field=field,
        message=message,
        suggestion=suggestion,
        requires_exploration=True,
        code=code,
    )


def check_references(citation: Citation) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    if citation.doi is not None and not is_valid_doi(citation.doi):
        issues.append(
            _warning(
                "DOI",
                f"DOI '{citation.doi}' does not match the 10.NNNN/suffix pattern",
                "Check the DOI against the publisher's landing page",
                IssueCode.MALFORMED_DOI,
            )
        )
    if citation.isbn is not None and not is_valid_isbn(citation.isbn):
        issues.append(
            _warning(
                "ISBN",
                f"ISBN '{citation.isbn}' should have 10 or 13 characters",
                "Copy the ISBN from the book's imprint page",
                IssueCode.MALFORMED_ISBN,
            )
        )
    if citation.issn is not None and not is_valid_issn(citation.issn):
        issues.append(
            _warning(
                "ISSN",
                f"ISSN '{citation.issn}' does not look like NNNN-NNNC",
                "Copy the ISSN from the journal's masthead",
                IssueCode.MALFORMED_ISSN,
            )
        )
    if citation.url is not None and not is_http_url(citation.url):
        issues.append(
            _warning(
                "URL",
                f"URL '{citation.url}' is not an absolute http(s) address",
                "Use the full address including http:// or https://",
                IssueCode.MALFORMED_URL,
            )
        )

    has_identifier = any(v is not None for v in (citation.doi, citation.isbn, citation.url))
    if not has_identifier and citation.kind not in IDENTIFIER_OPTIONAL_KINDS:
        issues.append(
            _warning(
                "identifiers",
                "No persistent identifier (DOI, ISBN or URL)",
                "Add a DOI, ISBN or stable URL so the source can be traced",
                IssueCode.NO_IDENTIFIER,
            )
        )
    return issues
