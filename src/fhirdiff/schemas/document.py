"""Parsed StructureDefinition with its snapshot and differential elements."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fhirdiff.schemas.element import Element, build_element
from fhirdiff.schemas.loader import read_resource

logger = logging.getLogger(__name__)

STRUCTURE_DEFINITION = "StructureDefinition"


def _index_first(elements: tuple[Element, ...], attr: str) -> dict[str, Element]:
    """Index elements by an attribute, keeping the first element per value."""
    index: dict[str, Element] = {}
    for element in elements:
        index.setdefault(getattr(element, attr), element)
    return index


@dataclass(frozen=True)
class SchemaDocument:
    """A StructureDefinition reduced to its two ordered element sequences.

    ``snapshot`` is the complete view, every element resolved on its own.
    ``differential`` holds only the elements the profile constrains, each
    resolved against the snapshot element at the same raw path.
    """

    url: str
    name: str
    type: str
    snapshot: tuple[Element, ...]
    differential: tuple[Element, ...]
    _snapshot_by_key: dict[str, Element] = field(init=False, repr=False, compare=False)
    _snapshot_by_path: dict[str, Element] = field(init=False, repr=False, compare=False)
    _differential_by_key: dict[str, Element] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_snapshot_by_key", _index_first(self.snapshot, "key"))
        object.__setattr__(self, "_snapshot_by_path", _index_first(self.snapshot, "path"))
        object.__setattr__(
            self, "_differential_by_key", _index_first(self.differential, "key")
        )

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> SchemaDocument:
        """Build a document from a parsed StructureDefinition.

        Raises:
            ValueError: If the resource is not a StructureDefinition.
            UnsupportedCardinalityError: If any element has unsupported cardinality.
        """
        resource_type = resource.get("resourceType")
        if resource_type != STRUCTURE_DEFINITION:
            raise ValueError(f"Expected a {STRUCTURE_DEFINITION}, got {resource_type!r}")

        raw_snapshot = resource.get("snapshot", {}).get("element", [])
        raw_differential = resource.get("differential", {}).get("element", [])

        raw_by_path: dict[str, dict[str, Any]] = {}
        for raw in raw_snapshot:
            raw_by_path.setdefault(raw["path"], raw)

        snapshot = tuple(build_element(raw) for raw in raw_snapshot)
        differential = tuple(
            build_element(raw, raw_by_path.get(raw["path"])) for raw in raw_differential
        )

        return cls(
            url=resource.get("url", ""),
            name=resource.get("name") or resource.get("id", ""),
            type=resource.get("type", ""),
            snapshot=snapshot,
            differential=differential,
        )

    @classmethod
    def load(cls, path: str | Path) -> SchemaDocument:
        """Read and parse a StructureDefinition JSON file."""
        document = cls.from_resource(read_resource(path))
        logger.info(
            "Loaded %s (%d snapshot, %d differential elements) from %s",
            document.name,
            len(document.snapshot),
            len(document.differential),
            path,
        )
        return document

    def find_declared(self, key: str) -> Element | None:
        """Get the differential element with this key."""
        return self._differential_by_key.get(key)

    def find_complete(self, key: str) -> Element | None:
        """Get the snapshot element with this key."""
        return self._snapshot_by_key.get(key)

    def find_complete_by_path(self, path: str) -> Element | None:
        """Get the first snapshot element at this root-stripped path."""
        return self._snapshot_by_path.get(path)
