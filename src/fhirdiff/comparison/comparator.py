"""Element matching and comparison between two schema documents."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fhirdiff.core.types import DifferenceRecord, Side
from fhirdiff.schemas.document import SchemaDocument
from fhirdiff.schemas.element import Element, compare
from fhirdiff.schemas.registry import DataTypeRegistry

logger = logging.getLogger(__name__)

Resolver = Callable[[Element, SchemaDocument, DataTypeRegistry], Element | None]


def from_declared(
    element: Element, other: SchemaDocument, registry: DataTypeRegistry
) -> Element | None:
    """Match against the other document's differential by key."""
    return other.find_declared(element.key)


def from_complete(
    element: Element, other: SchemaDocument, registry: DataTypeRegistry
) -> Element | None:
    """Match against the other document's snapshot by key."""
    return other.find_complete(element.key)


def from_data_types(
    element: Element, other: SchemaDocument, registry: DataTypeRegistry
) -> Element | None:
    """Match through the data type of an ancestor in the other document."""
    return registry.resolve_element(element.path, other)


# Tried in order, first match wins
RESOLUTION_CHAIN: tuple[tuple[str, Resolver], ...] = (
    ("declared", from_declared),
    ("complete", from_complete),
    ("data_type", from_data_types),
)

# Steps that match elements of the other document itself
DIRECT_STEPS = frozenset({"declared", "complete"})


@dataclass(frozen=True)
class Match:
    """A counterpart found by the resolution chain."""

    element: Element
    step: str

    @property
    def direct(self) -> bool:
        """Return True if the counterpart belongs to the other document."""
        return self.step in DIRECT_STEPS


def find_counterpart(
    element: Element,
    other: SchemaDocument,
    registry: DataTypeRegistry,
    chain: tuple[tuple[str, Resolver], ...] = RESOLUTION_CHAIN,
) -> Match | None:
    """Run the resolution chain for one element.

    Returns:
        The first Match found, or None if no step resolves the element.
    """
    for step, resolver in chain:
        counterpart = resolver(element, other, registry)
        if counterpart is not None:
            logger.debug("Matched %s by %s", element.key, step)
            return Match(counterpart, step)
    logger.debug("No counterpart for %s in %s", element.key, other.name)
    return None


@dataclass(frozen=True)
class ElementOutcome:
    """Result of visiting one declared element.

    ``differences`` is always expressed left-vs-right, whichever side drove
    the pass. An outcome without a counterpart is one-sided.
    """

    element: Element
    side: Side
    counterpart: Element | None = None
    differences: list[DifferenceRecord] | None = None

    @property
    def one_sided(self) -> bool:
        """Return True if no counterpart was found."""
        return self.counterpart is None


@dataclass
class ComparisonResult:
    """Outcomes of both comparison passes, in visiting order."""

    left: SchemaDocument
    right: SchemaDocument
    left_pass: list[ElementOutcome] = field(default_factory=list)
    right_pass: list[ElementOutcome] = field(default_factory=list)

    @property
    def outcomes(self) -> list[ElementOutcome]:
        """Return all outcomes, left pass first."""
        return self.left_pass + self.right_pass

    @property
    def difference_count(self) -> int:
        """Return the number of field-level differences."""
        return sum(len(o.differences or []) for o in self.outcomes)

    @property
    def one_sided_count(self) -> int:
        """Return the number of elements without a counterpart."""
        return sum(1 for o in self.outcomes if o.one_sided)


class Comparator:
    """Compares the declared elements of two schema documents.

    The left pass visits every left differential element. The right pass
    visits every right differential element except those already matched
    directly by key during the left pass, so no pair is reported twice.

    A right element the left pass never reached is still resolved against
    the left document, snapshot and data types included. Its differences are
    reported by the right pass, not only its absence, so a constraint added
    only on the right over an inherited left element shows up as a field
    difference rather than a RightOnly row.
    """

    def __init__(
        self,
        left: SchemaDocument,
        right: SchemaDocument,
        registry: DataTypeRegistry,
    ) -> None:
        """Initialize comparator.

        Args:
            left: Left schema document.
            right: Right schema document.
            registry: Data types used to resolve elements neither document declares.
        """
        self.left = left
        self.right = right
        self.registry = registry

    def _visit(self, element: Element, side: Side) -> tuple[ElementOutcome, Match | None]:
        other = self.right if side is Side.LEFT else self.left
        match = find_counterpart(element, other, self.registry)
        if match is None:
            return ElementOutcome(element=element, side=side), None

        if side is Side.LEFT:
            differences = compare(element, match.element)
        else:
            differences = compare(match.element, element)
        outcome = ElementOutcome(
            element=element,
            side=side,
            counterpart=match.element,
            differences=differences,
        )
        return outcome, match

    def compare(self) -> ComparisonResult:
        """Run the left pass, then the right pass."""
        result = ComparisonResult(left=self.left, right=self.right)
        matched_keys: set[str] = set()

        for element in self.left.differential:
            outcome, match = self._visit(element, Side.LEFT)
            result.left_pass.append(outcome)
            if match is not None and match.direct:
                matched_keys.add(match.element.key)

        for element in self.right.differential:
            if element.key in matched_keys:
                continue
            outcome, _ = self._visit(element, Side.RIGHT)
            result.right_pass.append(outcome)

        logger.info(
            "Compared %s with %s: %d differences, %d one-sided elements",
            self.left.name,
            self.right.name,
            result.difference_count,
            result.one_sided_count,
        )
        return result
