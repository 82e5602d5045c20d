"""Errors raised for caller mistakes.

Formal validation problems are never raised; they are reported as
:class:`~citegate.validation.models.ValidationIssue` values. The classes
here cover input that cannot enter the checkers at all.
"""

from typing import Optional


class CitegateError(Exception):
    """Base class for all citegate errors."""


class InvalidCitationError(CitegateError, ValueError):
    """
    Raised when a raw record cannot be read as a Citation.

    Attributes:
        citation_id: Identity of the offending record, when it could be read
        reason: Why the record was rejected
    """

    def __init__(self, reason: str, citation_id: Optional[str] = None) -> None:
        self.citation_id = citation_id
        self.reason = reason
        if citation_id:
            super().__init__(f"Citation '{citation_id}' rejected: {reason}")
        else:
            super().__init__(f"Citation rejected: {reason}")


class DuplicateCitationError(InvalidCitationError):
    """Raised when a batch holds two records with the same identity."""

    def __init__(self, citation_id: str) -> None:
        super().__init__("identity is not unique within the batch", citation_id=citation_id)
