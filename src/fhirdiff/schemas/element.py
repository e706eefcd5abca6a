"""Normalized element model built from raw StructureDefinition elements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fhirdiff.core.types import DiffField, DifferenceRecord, Usage

EXTENSION_TYPE = "Extension"

ALLOWED_MIN = (0, 1)
ALLOWED_MAX = ("0", "1", "*")


class UnsupportedCardinalityError(ValueError):
    """Raised when an element's resolved cardinality is outside 0..1 / 0|1|*."""

    def __init__(self, raw_path: str, bound: str, value: Any) -> None:
        self.raw_path = raw_path
        self.bound = bound
        self.value = value
        super().__init__(f"Unsupported {bound} cardinality {value!r} at {raw_path}")


@dataclass(frozen=True)
class Element:
    """One field-level constraint of a schema document."""

    path: str
    raw_path: str
    key: str
    type: str | None
    usage: Usage
    multiple: bool
    binding: str | None = None
    min: int = 0
    max: str = "*"

    @property
    def multiplicity(self) -> str:
        """Return 'Many' or 'One'."""
        return "Many" if self.multiple else "One"


def inherit(own: Any, base: Any, default: Any = None) -> Any:
    """Return the element's own value, else its base's, else the default."""
    if own is not None:
        return own
    if base is not None:
        return base
    return default


def trailing_segment(reference: str) -> str:
    """Get the last path segment of a URL or reference."""
    return reference.rstrip("/").rsplit("/", 1)[-1]


def strip_root(raw_path: str) -> str:
    """Drop the root resource/type name from a raw element path."""
    return ".".join(raw_path.split(".")[1:])


def _first_type(raw: dict[str, Any]) -> dict[str, Any] | None:
    types = raw.get("type")
    if not types:
        return None
    return types[0]


def _type_profile(type_entry: dict[str, Any]) -> str | None:
    """Get the type profile, which is a string in STU3 and a list in R4."""
    profile = type_entry.get("profile")
    if isinstance(profile, list):
        return profile[0] if profile else None
    return profile or None


def _resolve_type(
    path: str, raw: dict[str, Any], base: dict[str, Any] | None
) -> tuple[str, str | None]:
    """Derive (key, type name) from the element's first type entry."""
    type_entry = _first_type(raw)
    if type_entry is None and base is not None:
        type_entry = _first_type(base)
    if type_entry is None:
        return path, None

    code = type_entry.get("code")
    profile = _type_profile(type_entry)

    if code == EXTENSION_TYPE:
        key = f"{path}[{profile}]" if profile else path
        return key, EXTENSION_TYPE

    if profile:
        return path, trailing_segment(profile)
    return path, code


def _resolve_cardinality(
    raw_path: str, raw: dict[str, Any], base: dict[str, Any] | None
) -> tuple[int, str]:
    base = base or {}
    minimum = inherit(raw.get("min"), base.get("min"), 0)
    maximum = inherit(raw.get("max"), base.get("max"), "*")

    if isinstance(minimum, bool) or minimum not in ALLOWED_MIN:
        raise UnsupportedCardinalityError(raw_path, "minimum", minimum)
    if maximum not in ALLOWED_MAX:
        raise UnsupportedCardinalityError(raw_path, "maximum", maximum)
    return minimum, maximum


def _resolve_usage(
    minimum: int, maximum: str, raw: dict[str, Any], base: dict[str, Any] | None
) -> Usage:
    if maximum == "0":
        return Usage.PROHIBITED
    if minimum == 1:
        return Usage.REQUIRED
    must_support = inherit(raw.get("mustSupport"), (base or {}).get("mustSupport"), False)
    if must_support:
        return Usage.MUST_SUPPORT
    return Usage.OPTIONAL


def _value_set(binding: dict[str, Any]) -> str | None:
    """Get the value set identifier of a binding (STU3 or R4 layout)."""
    reference = binding.get("valueSetReference") or {}
    return reference.get("reference") or binding.get("valueSetUri") or binding.get("valueSet")


def _resolve_binding(raw: dict[str, Any], base: dict[str, Any] | None) -> str | None:
    own = raw.get("binding")
    inherited = (base or {}).get("binding")
    if own is None and inherited is None:
        return None

    own = own or {}
    inherited = inherited or {}
    strength = inherit(own.get("strength"), inherited.get("strength"))
    value_set = inherit(_value_set(own), _value_set(inherited))
    value_set_name = trailing_segment(value_set) if value_set else ""
    return f"{strength or ''}: {value_set_name}"


def build_element(raw: dict[str, Any], base: dict[str, Any] | None = None) -> Element:
    """Normalize a raw element definition, falling back to its base element.

    Args:
        raw: Element definition from a snapshot or differential.
        base: Snapshot element at the same raw path, if any.

    Returns:
        The resolved Element.

    Raises:
        UnsupportedCardinalityError: If min is not 0/1 or max not 0/1/*.
    """
    raw_path = raw["path"]
    path = strip_root(raw_path)
    key, type_name = _resolve_type(path, raw, base)
    minimum, maximum = _resolve_cardinality(raw_path, raw, base)

    return Element(
        path=path,
        raw_path=raw_path,
        key=key,
        type=type_name,
        usage=_resolve_usage(minimum, maximum, raw, base),
        multiple=maximum == "*",
        binding=_resolve_binding(raw, base),
        min=minimum,
        max=maximum,
    )


def compare(left: Element, right: Element) -> list[DifferenceRecord] | None:
    """Compare the tracked fields of two elements.

    Returns:
        One DifferenceRecord per mismatching field, or None when all match.
    """
    differences = []

    if left.type != right.type:
        differences.append(DifferenceRecord(DiffField.TYPE, left.type or "", right.type or ""))
    if left.usage != right.usage:
        differences.append(DifferenceRecord(DiffField.USE, left.usage.value, right.usage.value))
    if left.multiple != right.multiple:
        differences.append(
            DifferenceRecord(DiffField.MULTIPLE, left.multiplicity, right.multiplicity)
        )
    if left.binding != right.binding:
        differences.append(
            DifferenceRecord(DiffField.BINDING, left.binding or "", right.binding or "")
        )

    return differences or None
