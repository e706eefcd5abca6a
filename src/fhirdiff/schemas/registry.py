"""Registry of reusable data types from the FHIR base type bundle."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from fhirdiff.schemas.document import STRUCTURE_DEFINITION, SchemaDocument
from fhirdiff.schemas.element import Element
from fhirdiff.schemas.loader import read_resource

logger = logging.getLogger(__name__)


def split_points(path: str) -> Iterator[tuple[str, str]]:
    """Yield (base path, suffix) splits of a dotted path, deepest base first.

    >>> list(split_points("a.b.c"))
    [('a.b', 'c'), ('a', 'b.c')]
    """
    segments = path.split(".")
    for boundary in range(len(segments) - 1, 0, -1):
        yield ".".join(segments[:boundary]), ".".join(segments[boundary:])


class DataTypeRegistry:
    """Index of data type StructureDefinitions keyed by type id."""

    def __init__(self, types: Mapping[str, SchemaDocument]) -> None:
        """Initialize registry.

        Args:
            types: Data type documents keyed by their id (e.g. 'HumanName').
        """
        self._types = MappingProxyType(dict(types))

    @classmethod
    def from_bundle(cls, bundle: dict[str, Any]) -> DataTypeRegistry:
        """Build a registry from a Bundle of StructureDefinitions.

        Entries that aren't StructureDefinitions are ignored.
        """
        types: dict[str, SchemaDocument] = {}
        for entry in bundle.get("entry", []):
            resource = entry.get("resource") or {}
            if resource.get("resourceType") != STRUCTURE_DEFINITION:
                continue
            type_id = resource.get("id")
            if not type_id:
                continue
            types[type_id] = SchemaDocument.from_resource(resource)
        return cls(types)

    @classmethod
    def load(cls, path: str | Path) -> DataTypeRegistry:
        """Read a data type bundle from a JSON file."""
        registry = cls.from_bundle(read_resource(path))
        logger.info("Loaded %d data types from %s", len(registry), path)
        return registry

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def get(self, type_name: str | None) -> SchemaDocument | None:
        """Get the data type document for a type name."""
        if type_name is None:
            return None
        return self._types.get(type_name)

    def find_element(self, type_name: str | None, suffix: str) -> Element | None:
        """Get the snapshot element at a root-stripped path within a data type."""
        data_type = self.get(type_name)
        if data_type is None:
            return None
        return data_type.find_complete_by_path(suffix)

    def resolve_element(self, path: str, document: SchemaDocument) -> Element | None:
        """Resolve a path through the data type of its deepest known ancestor.

        Each split of ``path`` into a base path and a suffix is tried from the
        deepest base to the shallowest. The base path is looked up in the
        document's snapshot, and the suffix in the snapshot of that element's
        data type. The first hit wins.

        Args:
            path: Root-stripped element path, e.g. 'name.period.start'.
            document: Document whose snapshot holds the ancestor elements.

        Returns:
            The matching data type element, or None.
        """
        for base_path, suffix in split_points(path):
            ancestor = document.find_complete_by_path(base_path)
            if ancestor is None:
                continue
            element = self.find_element(ancestor.type, suffix)
            if element is not None:
                logger.debug(
                    "Resolved %s via %s (%s) -> %s", path, base_path, ancestor.type, suffix
                )
                return element
        logger.debug("Could not resolve %s through data types of %s", path, document.name)
        return None
