"""Core module for fhirdiff."""

from fhirdiff.core.config import DEFAULT_BUNDLE_NAME, CompareConfig, load_config
from fhirdiff.core.types import DiffField, DifferenceRecord, ReportRow, Side, Usage

__all__ = [
    "DEFAULT_BUNDLE_NAME",
    "CompareConfig",
    "DiffField",
    "DifferenceRecord",
    "ReportRow",
    "Side",
    "Usage",
    "load_config",
]
