"""Rendering comparison outcomes as an indented CSV report."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from pathlib import Path

import polars as pl

from fhirdiff.comparison.comparator import ComparisonResult, ElementOutcome
from fhirdiff.core.config import CompareConfig
from fhirdiff.core.types import ReportRow, Side
from fhirdiff.schemas.document import SchemaDocument
from fhirdiff.schemas.element import trailing_segment

HEADER = ("element", "left", "right")


def split_key(key: str) -> list[str]:
    """Split a key on dots that aren't inside extension brackets.

    >>> split_key("extension[http://x.org/y].value")
    ['extension[http://x.org/y]', 'value']
    """
    segments: list[str] = []
    current: list[str] = []
    depth = 0
    for char in key:
        if char == "[":
            depth += 1
        elif char == "]":
            depth = max(depth - 1, 0)
        if char == "." and depth == 0:
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    segments.append("".join(current))
    return segments


def display_segment(segment: str) -> str:
    """Shorten an extension profile in a segment to its trailing path segment."""
    if segment.endswith("]") and "[" in segment:
        name, profile = segment[:-1].split("[", 1)
        return f"{name}[{trailing_segment(profile)}]"
    return segment


def render_label(key: str, previous_key: str | None, indent: str = "  ") -> str:
    """Collapse the leading segments shared with the previous key into indentation.

    Args:
        key: Key of the element being rendered.
        previous_key: Key of the last rendered element, if any.
        indent: One indentation unit.

    Returns:
        The label, e.g. '  .family' after 'name.given'.
    """
    segments = split_key(key)
    if previous_key is None:
        return ".".join(display_segment(s) for s in segments)

    previous = split_key(previous_key)
    shared = 0
    for current_segment, previous_segment in zip(segments, previous, strict=False):
        if current_segment != previous_segment:
            break
        shared += 1

    # A repeated key still shows its last segment
    shared = min(shared, len(segments) - 1)
    if shared == 0:
        return ".".join(display_segment(s) for s in segments)
    remaining = ".".join(display_segment(s) for s in segments[shared:])
    return f"{indent * shared}.{remaining}"


def outcome_rows(outcome: ElementOutcome, label: str, config: CompareConfig) -> list[ReportRow]:
    """Build the report rows for one outcome under a given label."""
    key = outcome.element.key
    if outcome.one_sided:
        usage = outcome.element.usage.value
        if outcome.side is Side.LEFT:
            return [ReportRow(label, usage, config.not_applicable, key, side=Side.LEFT)]
        return [ReportRow(label, config.not_applicable, usage, key, side=Side.RIGHT)]

    return [
        ReportRow(label, difference.left, difference.right, key, difference.field)
        for difference in outcome.differences or []
    ]


def render_outcome(
    outcome: ElementOutcome, previous_key: str | None, config: CompareConfig
) -> tuple[list[ReportRow], str | None]:
    """Render one outcome and advance the previous-key accumulator.

    The accumulator only moves when the outcome produced rows.
    """
    label = render_label(outcome.element.key, previous_key, config.indent)
    rows = outcome_rows(outcome, label, config)
    if not rows:
        return rows, previous_key
    return rows, outcome.element.key


def render_pass(outcomes: Iterable[ElementOutcome], config: CompareConfig) -> list[ReportRow]:
    """Render the outcomes of one comparison pass in visiting order."""
    rows: list[ReportRow] = []
    previous_key: str | None = None
    for outcome in outcomes:
        emitted, previous_key = render_outcome(outcome, previous_key, config)
        rows.extend(emitted)
    return rows


def render_report(result: ComparisonResult, config: CompareConfig) -> list[ReportRow]:
    """Render both passes, left pass first."""
    return render_pass(result.left_pass, config) + render_pass(result.right_pass, config)


def write_csv(rows: Iterable[ReportRow], path: str | Path, config: CompareConfig) -> None:
    """Write report rows to a CSV file.

    Args:
        rows: Rendered report rows.
        path: Output file path.
        config: Controls the header and field columns.
    """
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if config.include_header:
            header = list(HEADER)
            if config.include_field:
                header.insert(1, "field")
            writer.writerow(header)
        for row in rows:
            if config.include_field:
                writer.writerow([row.label, row.kind, row.left, row.right])
            else:
                writer.writerow([row.label, row.left, row.right])


def describe_document(document: SchemaDocument, declared: bool = False) -> list[str]:
    """Describe each element of a document for console output.

    Args:
        document: Document to describe.
        declared: Describe the differential instead of the snapshot.

    Returns:
        One line per element: key, usage with '*' when multiple, type, binding.
    """
    elements = document.differential if declared else document.snapshot
    lines = []
    for element in elements:
        marker = "*" if element.multiple else ""
        parts = [element.key or document.type, f"{element.usage.value}{marker}"]
        parts.append(element.type or "-")
        if element.binding:
            parts.append(f"({element.binding})")
        lines.append("  ".join(parts))
    return lines


def summary_frame(rows: Iterable[ReportRow]) -> pl.DataFrame:
    """Count report rows per kind of difference.

    One-sided rows count as 'LeftOnly' or 'RightOnly'.

    Returns:
        DataFrame with columns 'kind' and 'count', largest count first.
    """
    kinds = [row.kind for row in rows]
    frame = pl.DataFrame({"kind": kinds}, schema={"kind": pl.Utf8})
    return (
        frame.group_by("kind")
        .agg(pl.len().alias("count"))
        .sort(["count", "kind"], descending=[True, False])
    )
