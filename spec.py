"""
Specification layer for distance engines.

A Spec defines the *contract* a DistanceEngine must satisfy.
It is purely declarative - it says WHAT must be true, not HOW.

Each spec is a named property with:
  - a human-readable description
  - a callable predicate ``predicate(engine, *buffers) -> bool``
    that returns True if the property holds for those buffers
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable

from buffer import EMPTY


# ---------------------------------------------------------------------------
# Core spec primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Property:
    """A single verifiable property of an engine."""

    name: str
    description: str
    predicate: Callable[..., bool]

    @property
    def arity(self) -> int:
        """How many buffers the predicate takes after the engine."""
        return len(inspect.signature(self.predicate).parameters) - 1

    def check(self, *args: Any) -> bool:
        """Evaluate the property predicate with the given arguments."""
        return self.predicate(*args)


@dataclass
class Spec:
    """An ordered collection of properties that together form a contract."""

    name: str
    properties: list[Property] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


def _gap(x: int, y: int) -> int:
    return abs(x - y)


# ---------------------------------------------------------------------------
# Spec builders
# ---------------------------------------------------------------------------

def distance_spec() -> Spec:
    """Metric properties of the exact distance."""
    spec = Spec(name="distance")

    spec.add(Property(
        name="identity",
        description="d(a, a) == 0",
        predicate=lambda eng, a: eng.exact(a, a) == 0,
    ))

    spec.add(Property(
        name="empty",
        description="d(a, empty) == |a|",
        predicate=lambda eng, a: eng.exact(a, EMPTY) == a.size,
    ))

    spec.add(Property(
        name="symmetry",
        description="d(a, b) == d(b, a)",
        predicate=lambda eng, a, b: eng.exact(a, b) == eng.exact(b, a),
    ))

    spec.add(Property(
        name="length_range",
        description="||a| - |b|| <= d(a, b) <= max(|a|, |b|)",
        predicate=lambda eng, a, b: (
            _gap(a.size, b.size) <= eng.exact(a, b) <= max(a.size, b.size)
        ),
    ))

    spec.add(Property(
        name="triangle",
        description="d(a, c) <= d(a, b) + d(b, c)",
        predicate=lambda eng, a, b, c: (
            eng.exact(a, c) <= eng.exact(a, b) + eng.exact(b, c)
        ),
    ))

    return spec


def bounds_spec() -> Spec:
    """The lower and upper bounds must sandwich the exact distance."""
    spec = Spec(name="bounds")

    spec.add(Property(
        name="sandwich",
        description="lower(a, b) <= d(a, b) <= upper(a, b)",
        predicate=lambda eng, a, b: (
            eng.lower(a, b) <= eng.exact(a, b) <= eng.upper(a, b)
        ),
    ))

    spec.add(Property(
        name="identity",
        description="lower(a, a) == upper(a, a) == 0",
        predicate=lambda eng, a: eng.lower(a, a) == 0 == eng.upper(a, a),
    ))

    spec.add(Property(
        name="lower_symmetry",
        description="lower(a, b) == lower(b, a)",
        predicate=lambda eng, a, b: eng.lower(a, b) == eng.lower(b, a),
    ))

    spec.add(Property(
        name="length_gap",
        description="both bounds are at least ||a| - |b||",
        predicate=lambda eng, a, b: (
            min(eng.lower(a, b), eng.upper(a, b)) >= _gap(a.size, b.size)
        ),
    ))

    return spec


def engine_specs() -> list[Spec]:
    return [distance_spec(), bounds_spec()]
