"""Export payload for the downstream exploration stage.

The payload is tagged with a format name and a semantic version. Consumers
accept any payload with the same major version: new fields are a minor
bump, removed or retyped fields a major one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from pydantic import ValidationError

from ..errors import CitegateError
from ..utils.logging import get_logger
from ..validation.models import ValidationResult, ValidationState
from .analyzer import AnalyzerConfig, UncertaintyAnalyzer, coerce_results
from .models import HandoffExport, InvalidCitation, UncertaintyAnalysis, ValidatedCitation

logger = get_logger(__name__)

EXPORT_FORMAT = "citegate.uncertainty-handoff"
EXPORT_VERSION = "1.0.0"


class IncompatibleExportError(CitegateError):
    """Raised when a payload has another format or major version."""


def _major(version: str) -> Optional[int]:
    head = version.split(".", 1)[0]
    return int(head) if head.isdigit() else None


def is_compatible(version: str, current: str = EXPORT_VERSION) -> bool:
    """True when ``version`` shares the major version of ``current``."""
    major = _major(version)
    return major is not None and major == _major(current)


def _reason(result: ValidationResult, floor: float) -> str:
    if result.state == ValidationState.VALID:
        return f"certainty {result.certainty.score:.2f} is below the export floor {floor:.2f}"
    relevant = result.errors or result.exploration_issues or list(result.issues)
    details = "; ".join(i.message for i in relevant)
    return f"{result.state.value}: {details}" if details else result.state.value


def build_export(
    results: Sequence[Any],
    analysis: Optional[UncertaintyAnalysis] = None,
    config: Optional[AnalyzerConfig] = None,
) -> HandoffExport:
    """Assemble the handoff payload for a batch.

    Args:
        results: Validation results of the batch (or their serialized dicts).
        analysis: A precomputed analysis of the same batch; computed when omitted.
        config: Thresholds; defaults to the configured settings.

    Returns:
        A :class:`HandoffExport` ready for :func:`write_export`.
    """
    analyzer = UncertaintyAnalyzer(config)
    if analysis is None:
        good, malformed = coerce_results(results)
        analysis = analyzer.analyze_readable(good, malformed)
    else:
        # Entries the analysis already skipped are not read (or reported) again.
        skipped = set(analysis.summary.malformed_results)
        good, _ = coerce_results([r for i, r in enumerate(results) if i not in skipped])
    floor = analyzer.config.export_certainty_floor

    validated: List[ValidatedCitation] = []
    invalid: List[InvalidCitation] = []
    for result in good:
        citation = result.citation
        if result.state == ValidationState.VALID and result.certainty.score >= floor:
            validated.append(
                ValidatedCitation(
                    citation_id=citation.citation_id,
                    kind=citation.kind,
                    title=citation.title,
                    certainty=result.certainty.score,
                )
            )
            continue
        uncertainties = [r.name for r in analysis.regions_for(citation.citation_id)]
        uncertainties += [i.message for i in result.exploration_issues]
        invalid.append(
            InvalidCitation(
                citation_id=citation.citation_id,
                kind=citation.kind,
                title=citation.title,
                state=result.state,
                certainty=result.certainty.score,
                reason=_reason(result, floor),
                uncertainties=uncertainties,
            )
        )

    return HandoffExport(
        format=EXPORT_FORMAT,
        version=EXPORT_VERSION,
        validated_citations=validated,
        invalid_citations=invalid,
        uncertainty_regions=analysis.regions,
        contradiction_hints=analysis.contradiction_hints,
        epistemic_summary=analysis.summary,
    )


def write_export(path: Union[str, Path], export: HandoffExport) -> Path:
    """Write the payload as UTF-8 JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export.to_json(), encoding="utf-8")
    logger.info(
        f"Wrote handoff export to {path}",
        extra={
            "extra": {
                "validated": len(export.validated_citations),
                "invalid": len(export.invalid_citations),
            }
        },
    )
    return path


def load_export(path: Union[str, Path]) -> HandoffExport:
    """Read a payload back, refusing other formats and major versions."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        export = HandoffExport.model_validate_json(text)
    except ValidationError as e:
        raise IncompatibleExportError(f"{path} is not a handoff export: {e.error_count()} errors") from e
    if export.format != EXPORT_FORMAT:
        raise IncompatibleExportError(f"{path} has format '{export.format}', expected '{EXPORT_FORMAT}'")
    if not is_compatible(export.version):
        raise IncompatibleExportError(
            f"{path} has version {export.version}, incompatible with {EXPORT_VERSION}"
        )
    return export
