"""Schema documents, elements and the data type registry."""

from fhirdiff.schemas.document import SchemaDocument
from fhirdiff.schemas.element import (
    Element,
    UnsupportedCardinalityError,
    build_element,
    compare,
    inherit,
)
from fhirdiff.schemas.loader import read_resource
from fhirdiff.schemas.registry import DataTypeRegistry, split_points

__all__ = [
    "DataTypeRegistry",
    "Element",
    "SchemaDocument",
    "UnsupportedCardinalityError",
    "build_element",
    "compare",
    "inherit",
    "read_resource",
    "split_points",
]
