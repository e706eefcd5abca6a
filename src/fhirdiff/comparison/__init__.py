"""Comparison engine and report rendering for fhirdiff."""

from fhirdiff.comparison.comparator import (
    RESOLUTION_CHAIN,
    Comparator,
    ComparisonResult,
    ElementOutcome,
    Match,
    find_counterpart,
)
from fhirdiff.comparison.report import (
    describe_document,
    render_label,
    render_pass,
    render_report,
    summary_frame,
    write_csv,
)

__all__ = [
    "RESOLUTION_CHAIN",
    "Comparator",
    "ComparisonResult",
    "ElementOutcome",
    "Match",
    "describe_document",
    "find_counterpart",
    "render_label",
    "render_pass",
    "render_report",
    "summary_frame",
    "write_csv",
]
