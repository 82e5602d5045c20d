"""Models for the uncertainty handoff to downstream exploration.

Every model here crosses a process boundary, so all of them serialize with
camelCase keys (``uncertaintyRegions``, ``requiresSemanticAnalysis``, ...)
while accepting either spelling on input.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.models import CitationKind
from ..validation.models import ValidationState


class HandoffModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class RegionType(str, Enum):
    STRUCTURAL = "structural"
    SEMANTIC = "semantic"
    RELATIONAL = "relational"
    TEMPORAL = "temporal"


class UncertaintyRegion(HandoffModel):
    """Cluster of citations sharing one kind of ambiguity."""

    name: str
    region_type: RegionType
    severity: float = Field(..., ge=0.0, le=1.0)
    description: str
    citation_ids: List[str] = Field(default_factory=list)
    suggested_features: List[str] = Field(default_factory=list)


class ContradictionType(str, Enum):
    AUTHORSHIP = "authorship"
    TEMPORAL = "temporal"
    METADATA = "metadata"
    SEMANTIC_HINT = "semantic-hint"


class ContradictionHint(HandoffModel):
    """Pairwise conflict between two citations, found by title match."""

    citation_a: str
    citation_b: str
    contradiction_type: ContradictionType
    confidence: float = Field(..., ge=0.0, le=1.0)
    requires_semantic_analysis: bool = True
    description: str = ""


class GapType(str, Enum):
    MISSING_CITATIONS = "missing-citations"
    INCOMPLETE_METADATA = "incomplete-metadata"
    TEMPORAL_GAP = "temporal-gap"
    CONTRADICTORY_CLAIMS = "contradictory-claims"
    AMBIGUOUS_SOURCES = "ambiguous-sources"


class GapSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class EpistemicGap(HandoffModel):
    """Category of knowledge missing from the corpus as a whole."""

    gap_type: GapType
    severity: GapSeverity
    description: str
    explorable: bool = True


class EpistemicSummary(HandoffModel):
    """Corpus-level aggregate over a batch of validation results."""

    total_citations: int = Field(0, ge=0)
    validated_citations: int = Field(0, ge=0)
    uncertain_citations: int = Field(0, ge=0)
    overall_certainty: float = Field(0.0, ge=0.0, le=1.0)
    gaps: List[EpistemicGap] = Field(default_factory=list)
    recommendation: str = ""
    malformed_results: List[int] = Field(
        default_factory=list,
        description="Positions of inputs that could not be read as validation results",
    )

    def has_gap(self, gap_type: GapType) -> bool:
        return any(g.gap_type == gap_type for g in self.gaps)


class UncertaintyAnalysis(HandoffModel):
    """Everything the analyzer derives from one batch."""

    regions: List[UncertaintyRegion] = Field(default_factory=list)
    contradiction_hints: List[ContradictionHint] = Field(default_factory=list)
    summary: EpistemicSummary = Field(default_factory=EpistemicSummary)

    def region(self, name: str) -> Optional[UncertaintyRegion]:
        for region in self.regions:
            if region.name == name:
                return region
        return None

    def regions_at_least(self, severity: float) -> List[UncertaintyRegion]:
        return [r for r in self.regions if r.severity >= severity]

    def regions_for(self, citation_id: str) -> List[UncertaintyRegion]:
        return [r for r in self.regions if citation_id in r.citation_ids]


class ValidatedCitation(HandoffModel):
    citation_id: str
    kind: CitationKind
    title: str
    certainty: float = Field(..., ge=0.0, le=1.0)


class InvalidCitation(HandoffModel):
    citation_id: str
    kind: CitationKind
    title: str
    state: ValidationState
    certainty: float = Field(..., ge=0.0, le=1.0)
    reason: str
    uncertainties: List[str] = Field(default_factory=list)


class HandoffExport(HandoffModel):
    """Versioned payload handed to the exploration stage.

    Adding fields is a minor version change; removing a field or changing
    its type bumps the major version.
    """

    format: str
    version: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    validated_citations: List[ValidatedCitation] = Field(default_factory=list)
    invalid_citations: List[InvalidCitation] = Field(default_factory=list)
    uncertainty_regions: List[UncertaintyRegion] = Field(default_factory=list)
    contradiction_hints: List[ContradictionHint] = Field(default_factory=list)
    epistemic_summary: EpistemicSummary = Field(default_factory=EpistemicSummary)

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
