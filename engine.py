"""
Distance engine: one configured object for all three computations.

The engine binds a Bounds domain (and the upper bound's chunk size) so
that every computation run through it shares the same checked
arithmetic.  ``compute`` dispatches on the command-line mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bounds import Bounds, SIZE
from buffer import ByteBuffer
from checked import CheckedArithmetic
from exact import exact_distance
from lower import lower_bound
from upper import CHUNK_SIZE, upper_bound


class Mode(str, Enum):
    """Which value to compute, keyed by its command-line flag."""

    DISTANCE = "d"
    LOWER = "l"
    UPPER = "u"

    @property
    def flag(self) -> str:
        return f"-{self.value}"


@dataclass(frozen=True)
class DistanceEngine:
    """
    Exact distance and both bounds, all computed within ``bounds``.
    """

    bounds: Bounds = SIZE
    chunk_size: int = CHUNK_SIZE

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @property
    def arith(self) -> CheckedArithmetic:
        return CheckedArithmetic(bounds=self.bounds)

    # -- entry points -----------------------------------------------------

    def exact(self, a: ByteBuffer, b: ByteBuffer) -> int:
        return exact_distance(a, b, self.arith)

    def lower(self, a: ByteBuffer, b: ByteBuffer) -> int:
        return lower_bound(a, b, self.arith)

    def upper(self, a: ByteBuffer, b: ByteBuffer) -> int:
        return upper_bound(a, b, self.arith, self.chunk_size)

    def compute(self, mode: Mode, a: ByteBuffer, b: ByteBuffer) -> int:
        """Run the computation selected by ``mode``."""
        if mode == Mode.DISTANCE:
            return self.exact(a, b)
        if mode == Mode.LOWER:
            return self.lower(a, b)
        return self.upper(a, b)
