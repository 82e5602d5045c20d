"""Uncertainty handoff package.

This package turns a batch of validation results into the payload handed
to a downstream exploration stage: uncertainty regions that cluster
records by cause of ambiguity, contradiction hints between records that
share a title, and an epistemic summary of the corpus as a whole.
"""

from .analyzer import AnalyzerConfig, UncertaintyAnalyzer, analyze_results  # noqa: F401
from .export import (  # noqa: F401
    EXPORT_FORMAT,
    EXPORT_VERSION,
    IncompatibleExportError,
    build_export,
    is_compatible,
    load_export,
    write_export,
)
from .models import (  # noqa: F401
    ContradictionHint,
    ContradictionType,
    EpistemicGap,
    EpistemicSummary,
    GapSeverity,
    GapType,
    HandoffExport,
    RegionType,
    UncertaintyAnalysis,
    UncertaintyRegion,
)
