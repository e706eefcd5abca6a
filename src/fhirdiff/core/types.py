"""Core type definitions for fhirdiff."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Usage(Enum):
    """How a profile expects an element to be populated."""

    PROHIBITED = "Prohibited"  # max = 0
    OPTIONAL = "Optional"
    MUST_SUPPORT = "MustSupport"  # optional, but consumers must handle it
    REQUIRED = "Required"  # min = 1


class DiffField(Enum):
    """Element fields tracked by the comparison."""

    TYPE = "Type"
    USE = "Use"
    MULTIPLE = "Multiple"
    BINDING = "Binding"


class Side(Enum):
    """Which document drove a comparison pass."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class DifferenceRecord:
    """A single field-level discrepancy between two elements."""

    field: DiffField
    left: str
    right: str


@dataclass(frozen=True)
class ReportRow:
    """One rendered line of the comparison report.

    Rows for an element present on one side only carry that side instead of
    a field.
    """

    label: str
    left: str
    right: str
    key: str
    field: DiffField | None = None
    side: Side | None = None

    @property
    def kind(self) -> str:
        """Return the field name, or LeftOnly/RightOnly for one-sided rows."""
        if self.field is not None:
            return self.field.value
        return "LeftOnly" if self.side is Side.LEFT else "RightOnly"
