"""Uncertainty analysis over a batch of validation results.

The analyzer groups records that share one kind of ambiguity into
uncertainty regions, flags pairs of records whose titles match but whose
creators, dates or identifiers disagree, and condenses the batch into an
epistemic summary with a recommendation for the exploration stage.

Unlike the per-record checkers it needs the whole batch before it can say
anything, and the pairwise scan is quadratic in the size of each group of
records sharing a title. It never raises on bad input: entries that cannot
be read as validation results are skipped, logged and listed in the
summary.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, ValidationError

from ..config.settings import Settings, settings
from ..core.ids import normalize_doi, normalize_isbn
from ..core.normalization import creator_set, extract_year, normalize_title
from ..utils.logging import get_logger
from ..validation.models import IssueCode, ValidationResult, ValidationState
from ..validation.scoring import REFERENTIAL_BASE
from .models import (
    ContradictionHint,
    ContradictionType,
    EpistemicGap,
    EpistemicSummary,
    GapSeverity,
    GapType,
    RegionType,
    UncertaintyAnalysis,
    UncertaintyRegion,
)

logger = get_logger(__name__)

LOW_CERTAINTY_REGION = "low-certainty-region"
NO_IDENTIFIER_REGION = "no-persistent-identifiers"
TEMPORAL_REGION = "temporal-uncertainties"
CONTRADICTION_REGION = "contradictory-relations"

RECOMMEND_EXPLORE = "Corpus is well-structured, explore minor uncertainties."
RECOMMEND_IMPROVE = "Corpus needs improvement before exploration."
RECOMMEND_REWORK = "Corpus requires significant work before exploration."


class AnalyzerConfig(BaseModel):
    """Thresholds used by the analyzer and the export builder."""

    low_certainty_threshold: float = Field(0.4, ge=0.0, le=1.0)
    low_certainty_severity: float = Field(0.8, ge=0.0, le=1.0)
    missing_identifier_severity: float = Field(0.6, ge=0.0, le=1.0)
    temporal_severity: float = Field(0.5, ge=0.0, le=1.0)
    contradiction_region_severity: float = Field(0.9, ge=0.0, le=1.0)
    contradiction_confidence: float = Field(0.6, ge=0.0, le=1.0)
    export_certainty_floor: float = Field(0.7, ge=0.0, le=1.0)
    temporal_gap_years: int = Field(25, ge=1)
    ambiguous_ratio: float = Field(0.5, ge=0.0, le=1.0)

    @classmethod
    def from_settings(cls, source: Optional[Settings] = None) -> "AnalyzerConfig":
        source = source or settings
        return cls(**{name: getattr(source, name) for name in cls.model_fields})


def coerce_results(results: Sequence[Any]) -> Tuple[List[ValidationResult], List[int]]:
    """Split input into readable results and positions of unreadable ones."""
    good: List[ValidationResult] = []
    malformed: List[int] = []
    for index, item in enumerate(results):
        if isinstance(item, ValidationResult):
            good.append(item)
            continue
        if isinstance(item, Mapping):
            try:
                good.append(ValidationResult.model_validate(dict(item)))
                continue
            except ValidationError as e:
                logger.warning(f"Skipping malformed validation result at position {index}: {e.error_count()} errors")
        else:
            logger.warning(f"Skipping non-result entry at position {index}: {type(item).__name__}")
        malformed.append(index)
    return good, malformed


def has_identifier(result: ValidationResult) -> bool:
    return result.certainty.factors.referential > REFERENTIAL_BASE


def recommendation_for(overall_certainty: float) -> str:
    if overall_certainty >= 0.8:
        return RECOMMEND_EXPLORE
    if overall_certainty >= 0.5:
        return RECOMMEND_IMPROVE
    return RECOMMEND_REWORK


class UncertaintyAnalyzer:
    """Turn a batch of validation results into an uncertainty handoff."""

    def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
        self.config = config or AnalyzerConfig.from_settings()

    def analyze(self, results: Sequence[Any]) -> UncertaintyAnalysis:
        """Analyze a complete batch.

        Args:
            results: Validation results, or dicts in their serialized shape.

        Returns:
            Regions, contradiction hints and the epistemic summary.
        """
        good, malformed = coerce_results(results)
        return self.analyze_readable(good, malformed)

    def analyze_readable(
        self, good: Sequence[ValidationResult], malformed: Sequence[int] = ()
    ) -> UncertaintyAnalysis:
        """Analyze results already split by :func:`coerce_results`."""
        hints = self.detect_contradictions(good)
        regions = self.detect_regions(good, hints)
        summary = self.summarize(good, hints, malformed)
        logger.info(
            f"Analyzed {len(good)} results: {len(regions)} regions, {len(hints)} contradiction hints",
            extra={"extra": {"malformed": len(malformed), "overall_certainty": summary.overall_certainty}},
        )
        return UncertaintyAnalysis(regions=regions, contradiction_hints=hints, summary=summary)

    def detect_regions(
        self,
        results: Sequence[ValidationResult],
        hints: Sequence[ContradictionHint] = (),
    ) -> List[UncertaintyRegion]:
        """Group records by cause of ambiguity. Empty regions are omitted."""
        cfg = self.config
        regions: List[UncertaintyRegion] = []

        low = [r.citation_id for r in results if r.certainty.score < cfg.low_certainty_threshold]
        if low:
            regions.append(
                UncertaintyRegion(
                    name=LOW_CERTAINTY_REGION,
                    region_type=RegionType.STRUCTURAL,
                    severity=cfg.low_certainty_severity,
                    description=(
                        f"{len(low)} citations score below {cfg.low_certainty_threshold:.2f} certainty"
                    ),
                    citation_ids=low,
                    suggested_features=["field-recovery", "source-reconciliation"],
                )
            )

        unanchored = [r.citation_id for r in results if not has_identifier(r)]
        if unanchored:
            regions.append(
                UncertaintyRegion(
                    name=NO_IDENTIFIER_REGION,
                    region_type=RegionType.RELATIONAL,
                    severity=cfg.missing_identifier_severity,
                    description=f"{len(unanchored)} citations carry no DOI, ISBN or URL",
                    citation_ids=unanchored,
                    suggested_features=["identifier-discovery", "catalogue-matching"],
                )
            )

        temporal = [r.citation_id for r in results if r.has_issue(IssueCode.IMPLAUSIBLE_YEAR)]
        if temporal:
            regions.append(
                UncertaintyRegion(
                    name=TEMPORAL_REGION,
                    region_type=RegionType.TEMPORAL,
                    severity=cfg.temporal_severity,
                    description=f"{len(temporal)} citations have unusual publication years",
                    citation_ids=temporal,
                    suggested_features=["date-verification", "edition-history"],
                )
            )

        if hints:
            involved = {h.citation_a for h in hints} | {h.citation_b for h in hints}
            contradicted = [r.citation_id for r in results if r.citation_id in involved]
            regions.append(
                UncertaintyRegion(
                    name=CONTRADICTION_REGION,
                    region_type=RegionType.SEMANTIC,
                    severity=cfg.contradiction_region_severity,
                    description=f"{len(contradicted)} citations take part in {len(hints)} contradiction hints",
                    citation_ids=contradicted,
                    suggested_features=["semantic-comparison", "authorship-resolution"],
                )
            )
        return regions

    def detect_contradictions(self, results: Sequence[ValidationResult]) -> List[ContradictionHint]:
        """Flag pairs of records with the same normalized title.

        Differing creators give an authorship hint; same creators with
        differing publication years give a temporal hint; same creators and
        years with conflicting DOIs or ISBNs give a metadata hint. Matching titles
        never prove a contradiction, so every hint asks for semantic
        analysis.
        """
        groups: Dict[str, List[ValidationResult]] = defaultdict(list)
        for result in results:
            key = normalize_title(result.citation.title)
            if key:
                groups[key].append(result)

        hints: List[ContradictionHint] = []
        for members in groups.values():
            for i, first in enumerate(members):
                for second in members[i + 1:]:
                    hint = self._compare(first, second)
                    if hint is not None:
                        hints.append(hint)
        return hints

    def _compare(self, first: ValidationResult, second: ValidationResult) -> Optional[ContradictionHint]:
        a, b = first.citation, second.citation
        if a.citation_id == b.citation_id:
            return None
        if creator_set(a.creators) != creator_set(b.creators):
            kind = ContradictionType.AUTHORSHIP
            description = f"'{a.title}' is credited to different creators"
        elif _conflicts(extract_year(a.date), extract_year(b.date)):
            kind = ContradictionType.TEMPORAL
            description = f"'{a.title}' by the same creators is dated {a.date} and {b.date}"
        elif _conflicts(normalize_doi(a.doi), normalize_doi(b.doi)) or _conflicts(
            normalize_isbn(a.isbn), normalize_isbn(b.isbn)
        ):
            kind = ContradictionType.METADATA
            description = f"'{a.title}' carries conflicting identifiers"
        else:
            return None
        return ContradictionHint(
            citation_a=a.citation_id,
            citation_b=b.citation_id,
            contradiction_type=kind,
            confidence=self.config.contradiction_confidence,
            requires_semantic_analysis=True,
            description=description,
        )

    def summarize(
        self,
        results: Sequence[ValidationResult],
        hints: Sequence[ContradictionHint] = (),
        malformed: Sequence[int] = (),
    ) -> EpistemicSummary:
        total = len(results)
        validated = sum(1 for r in results if r.state == ValidationState.VALID)
        overall = sum(r.certainty.score for r in results) / total if total else 0.0
        return EpistemicSummary(
            total_citations=total,
            validated_citations=validated,
            uncertain_citations=total - validated,
            overall_certainty=min(overall, 1.0),
            gaps=self.detect_gaps(results, hints),
            recommendation=recommendation_for(overall),
            malformed_results=list(malformed),
        )

    def detect_gaps(
        self,
        results: Sequence[ValidationResult],
        hints: Sequence[ContradictionHint] = (),
    ) -> List[EpistemicGap]:
        cfg = self.config
        total = len(results)
        if total == 0:
            return [
                EpistemicGap(
                    gap_type=GapType.MISSING_CITATIONS,
                    severity=GapSeverity.CRITICAL,
                    description="The batch contains no readable citations",
                    explorable=False,
                )
            ]

        gaps: List[EpistemicGap] = []
        anchored = sum(1 for r in results if has_identifier(r))
        if anchored == 0:
            gaps.append(
                EpistemicGap(
                    gap_type=GapType.INCOMPLETE_METADATA,
                    severity=GapSeverity.CRITICAL,
                    description="No citation in the batch carries a persistent identifier",
                )
            )
        elif (total - anchored) / total > 0.5:
            gaps.append(
                EpistemicGap(
                    gap_type=GapType.INCOMPLETE_METADATA,
                    severity=GapSeverity.HIGH,
                    description=f"{total - anchored} of {total} citations lack a persistent identifier",
                )
            )

        years = sorted({y for y in (extract_year(r.citation.date) for r in results) if y is not None})
        widest = max((b - a for a, b in zip(years, years[1:])), default=0)
        if widest >= cfg.temporal_gap_years:
            gaps.append(
                EpistemicGap(
                    gap_type=GapType.TEMPORAL_GAP,
                    severity=GapSeverity.MEDIUM,
                    description=f"Publication years leave a gap of {widest} years",
                )
            )

        if hints:
            gaps.append(
                EpistemicGap(
                    gap_type=GapType.CONTRADICTORY_CLAIMS,
                    severity=GapSeverity.HIGH,
                    description=f"{len(hints)} pairs of citations may contradict each other",
                )
            )

        uncertain = sum(1 for r in results if r.state != ValidationState.VALID)
        if uncertain / total > cfg.ambiguous_ratio:
            gaps.append(
                EpistemicGap(
                    gap_type=GapType.AMBIGUOUS_SOURCES,
                    severity=GapSeverity.MEDIUM,
                    description=f"{uncertain} of {total} citations are not fully validated",
                )
            )
        return gaps


def _conflicts(left: Optional[Any], right: Optional[Any]) -> bool:
    return left is not None and right is not None and left != right


def analyze_results(results: Sequence[Any], config: Optional[AnalyzerConfig] = None) -> UncertaintyAnalysis:
    """Analyze a batch with default or given thresholds."""
    return UncertaintyAnalyzer(config).analyze(results)
