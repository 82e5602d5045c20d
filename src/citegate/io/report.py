"""Console report for a validated batch.

``render_report`` prints the state counts, the uncertainty regions, the
contradiction hints and the epistemic summary of a batch using rich
tables and panels. It only reads the results and the analysis; callers
that want the text rather than terminal output can pass a ``Console``
writing to a ``StringIO``.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..handoff.analyzer import UncertaintyAnalyzer
from ..handoff.models import GapSeverity, UncertaintyAnalysis
from ..validation.models import ValidationResult, ValidationState

console = Console()

STATE_STYLES = {
    ValidationState.VALID: "green",
    ValidationState.INCOMPLETE: "yellow",
    ValidationState.INCONSISTENT: "red",
    ValidationState.UNCERTAIN: "magenta",
}

GAP_STYLES = {
    GapSeverity.LOW: "blue",
    GapSeverity.MEDIUM: "yellow",
    GapSeverity.HIGH: "red",
    GapSeverity.CRITICAL: "bold red",
}


def _state_table(results: Sequence[ValidationResult]) -> Table:
    counts = Counter(r.state for r in results)
    total = len(results) if results else 1
    table = Table(title="Validation States")
    table.add_column("State", style="cyan")
    table.add_column("Citations", justify="right")
    table.add_column("Percentage", style="magenta", justify="right")
    for state in ValidationState:
        count = counts.get(state, 0)
        pct = (count / total) * 100
        style = STATE_STYLES[state]
        table.add_row(f"[{style}]{state.value.title()}[/{style}]", str(count), f"{pct:.1f}%")
    return table


def _region_table(analysis: UncertaintyAnalysis) -> Table:
    table = Table(title="Uncertainty Regions")
    table.add_column("Region", style="cyan")
    table.add_column("Type")
    table.add_column("Severity", justify="right")
    table.add_column("Citations", justify="right")
    table.add_column("Description")
    for region in sorted(analysis.regions, key=lambda r: r.severity, reverse=True):
        table.add_row(
            region.name,
            region.region_type.value,
            f"{region.severity:.2f}",
            str(len(region.citation_ids)),
            region.description,
        )
    return table


def render_report(
    results: Sequence[ValidationResult],
    analysis: Optional[UncertaintyAnalysis] = None,
    out: Optional[Console] = None,
    max_issues: int = 20,
) -> None:
    """Print a summary report for a validated batch.

    Args:
        results: Validation results of the batch.
        analysis: Analysis of the same batch; computed when omitted.
        out: Console to print to; defaults to the module console.
        max_issues: How many individual error lines to list before eliding.
    """
    out = out or console
    if analysis is None:
        analysis = UncertaintyAnalyzer().analyze(results)
    summary = analysis.summary

    out.print(Panel(f"Citations: {summary.total_citations}", title="Validation Report", border_style="cyan"))
    out.print(_state_table(results))

    errors = [(r.citation_id, i) for r in results for i in r.errors]
    if errors:
        out.print(f"\n[bold red]Errors ({len(errors)}):[/bold red]")
        for citation_id, issue in errors[:max_issues]:
            out.print(f"  [red]✗ {escape(citation_id)}: {escape(issue.message)}[/red]")
        if len(errors) > max_issues:
            out.print(f"  [dim]... and {len(errors) - max_issues} more errors[/dim]")

    if analysis.regions:
        out.print(_region_table(analysis))
    else:
        out.print("\n[green]✓ No uncertainty regions[/green]")

    if analysis.contradiction_hints:
        out.print(f"\n[bold yellow]Contradiction hints ({len(analysis.contradiction_hints)}):[/bold yellow]")
        for hint in analysis.contradiction_hints:
            out.print(
                f"  [yellow]⚠ {hint.contradiction_type.value}[/yellow] "
                f"{escape(hint.citation_a)} ↔ {escape(hint.citation_b)} ({hint.confidence:.2f})"
            )

    if summary.gaps:
        out.print("\n[bold]Epistemic gaps:[/bold]")
        for gap in summary.gaps:
            style = GAP_STYLES[gap.severity]
            label = escape(f"[{gap.severity.value}]")
            out.print(f"  [{style}]{label}[/{style}] {gap.gap_type.value}: {escape(gap.description)}")

    if summary.malformed_results:
        out.print(f"\n[dim]{len(summary.malformed_results)} malformed results skipped[/dim]")

    out.print("\n[bold]Summary:[/bold]")
    out.print(f"  Validated: {summary.validated_citations}")
    out.print(f"  Uncertain: {summary.uncertain_citations}")
    out.print(f"  Overall certainty: {summary.overall_certainty:.2f}")
    out.print(f"  Recommendation: {summary.recommendation}")
