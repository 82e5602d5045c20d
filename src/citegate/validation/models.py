"""Models for validation issues, certainty and per-record results.

``ValidationIssue`` describes one detected problem. ``Certainty`` holds the
weighted confidence score and the three factors it is built from.
``ValidationResult`` ties a citation to its issues, its certainty and the
state it was classified into. Results hold the citation by reference; the
engine never copies or changes the record.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.models import Citation


class Severity(str, Enum):
    """How serious an issue is."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCode(str, Enum):
    """Machine-readable name of the rule that raised an issue."""

    MISSING_FIELD = "missing-field"
    NO_CREATORS = "no-creators"
    BLANK_TITLE = "blank-title"
    INVALID_DATE = "invalid-date"
    IMPLAUSIBLE_YEAR = "implausible-year"
    BLANK_FAMILY_NAME = "blank-family-name"
    MALFORMED_DOI = "malformed-doi"
    MALFORMED_ISBN = "malformed-isbn"
    MALFORMED_ISSN = "malformed-issn"
    MALFORMED_URL = "malformed-url"
    NO_IDENTIFIER = "no-persistent-identifier"


class ValidationState(str, Enum):
    """Outcome of one validation pass. Every state is terminal."""

    VALID = "valid"
    INCOMPLETE = "incomplete"
    INCONSISTENT = "inconsistent"
    UNCERTAIN = "uncertain"


class _ValidationModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ValidationIssue(_ValidationModel):
    """One problem found by a rule checker."""

    severity: Severity
    field: Optional[str] = None
    message: str
    suggestion: Optional[str] = None
    requires_exploration: bool = False
    code: Optional[IssueCode] = None


class CertaintyFactors(_ValidationModel):
    structural: float = Field(..., ge=0.0, le=1.0)
    consistency: float = Field(..., ge=0.0, le=1.0)
    referential: float = Field(..., ge=0.0, le=1.0)


class Certainty(_ValidationModel):
    """Weighted 0..1 confidence that a record is structurally sound."""

    score: float = Field(..., ge=0.0, le=1.0)
    factors: CertaintyFactors
    reasoning: str


class ValidationResult(_ValidationModel):
    """The engine's output for one citation."""

    citation: Citation
    state: ValidationState
    certainty: Certainty
    issues: Tuple[ValidationIssue, ...] = Field(default_factory=tuple)
    validated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def citation_id(self) -> str:
        return self.citation.citation_id

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def exploration_issues(self) -> List[ValidationIssue]:
        """Issues that formal checks cannot settle."""
        return [i for i in self.issues if i.requires_exploration]

    def has_issue(self, code: IssueCode) -> bool:
        return any(i.code == code for i in self.issues)
