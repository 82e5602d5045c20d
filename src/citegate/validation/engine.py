"""Validation engine for single citations and batches.

``CitationValidator`` runs the structural, consistency and referential
checkers over a record, classifies the combined issue list and scores it.
Checkers are pure functions, so records can be validated in any order.
Raw mappings are turned into :class:`Citation` objects before any checker
runs; a mapping that cannot be read is rejected with
:class:`InvalidCitationError` instead of being coerced.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..config.settings import settings
from ..core.models import Citation
from ..errors import DuplicateCitationError, InvalidCitationError
from ..utils.logging import get_logger
from .classifier import classify
from .consistency import check_consistency
from .models import ValidationIssue, ValidationResult
from .referential import check_references
from .scoring import compute_certainty
from .structural import check_structure

logger = get_logger(__name__)

CitationInput = Union[Citation, Mapping[str, Any]]
ResultCallback = Callable[[int, ValidationResult], None]


def _record_id(record: Mapping[str, Any]) -> Optional[str]:
    for key in ("citation_id", "citationId", "id", "key"):
        value = record.get(key)
        if value:
            return str(value)
    return None


def to_citation(record: CitationInput) -> Citation:
    """Return ``record`` as a Citation, rejecting anything malformed."""
    if isinstance(record, Citation):
        return record
    if not isinstance(record, Mapping):
        raise InvalidCitationError(f"expected a Citation or mapping, got {type(record).__name__}")
    try:
        return Citation.model_validate(dict(record))
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidCitationError(problems, citation_id=_record_id(record)) from e


class CitationValidator:
    """Validate citations against completeness and consistency rules."""

    def __init__(
        self,
        min_plausible_year: Optional[int] = None,
        max_plausible_year: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.min_plausible_year = (
            settings.min_plausible_year if min_plausible_year is None else min_plausible_year
        )
        self.max_plausible_year = (
            settings.max_plausible_year if max_plausible_year is None else max_plausible_year
        )
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def check(self, citation: Citation) -> List[ValidationIssue]:
        """Run all checkers and return their issues in a fixed order."""
        return (
            check_structure(citation)
            + check_consistency(citation, self.min_plausible_year, self.max_plausible_year)
            + check_references(citation)
        )

    def validate(self, record: CitationInput) -> ValidationResult:
        """Validate a single citation.

        Args:
            record: A Citation, or a mapping in the Citation shape.

        Returns:
            The :class:`ValidationResult` for the record.

        Raises:
            InvalidCitationError: If a mapping cannot be read as a Citation.
        """
        citation = to_citation(record)
        issues = self.check(citation)
        result = ValidationResult(
            citation=citation,
            state=classify(issues),
            certainty=compute_certainty(citation, issues),
            issues=tuple(issues),
            validated_at=self.clock(),
        )
        logger.debug(
            f"Validated {citation.citation_id}: {result.state.value} ({result.certainty.score:.2f})"
        )
        return result

    def validate_batch(
        self,
        records: Iterable[CitationInput],
        on_result: Optional[ResultCallback] = None,
    ) -> List[ValidationResult]:
        """Validate every record of a batch.

        All records are read and identity-checked before any checker runs,
        so a malformed record rejects the whole batch up front rather than
        halfway through. Each accepted record gets exactly one result.

        Args:
            records: Citations or mappings in the Citation shape.
            on_result: Called with ``(index, result)`` after each record.

        Raises:
            InvalidCitationError: If a record cannot be read as a Citation.
            DuplicateCitationError: If two records share an identity.
        """
        citations = [to_citation(r) for r in records]
        seen = set()
        for citation in citations:
            if citation.citation_id in seen:
                raise DuplicateCitationError(citation.citation_id)
            seen.add(citation.citation_id)

        results: List[ValidationResult] = []
        for index, citation in enumerate(citations):
            result = self.validate(citation)
            results.append(result)
            if on_result is not None:
                on_result(index, result)

        counts = Counter(r.state.value for r in results)
        logger.info(
            f"Validated batch of {len(results)} citations",
            extra={"extra": {"states": dict(counts)}},
        )
        return results


def validate_citation(record: CitationInput) -> ValidationResult:
    """Validate one record with default settings."""
    return CitationValidator().validate(record)
