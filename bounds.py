"""
Bounds layer for distance computations.

Bounds define the unsigned integer *domain* that every buffer size and
every distance value must live in.  The default domain, ``SIZE``, is the
platform's ``size_t``: the width of a pointer on the running interpreter.

Python integers never wrap, so the domain is what gives the checked
arithmetic something to check against.  Smaller presets exist mainly so
that tests can reach the overflow paths with small inputs.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """
    An integer domain [lo, hi].

    Every result produced under these bounds is guaranteed to live in
    [lo, hi]; anything that would escape it fails instead.
    """

    lo: int
    hi: int

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    @property
    def digits(self) -> int:
        """Number of decimal digits needed to write ``hi``."""
        return len(str(self.hi))

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi


def unsigned(bits: int) -> Bounds:
    """Bounds of an unsigned integer type that is ``bits`` wide."""
    if bits <= 0:
        raise ValueError(f"bits must be positive, got {bits}")
    return Bounds(lo=0, hi=2**bits - 1)


# ---------------------------------------------------------------------------
# Common bounds presets
# ---------------------------------------------------------------------------

POINTER_BITS = struct.calcsize("P") * 8

SIZE = unsigned(POINTER_BITS)
UINT8 = unsigned(8)
UINT16 = unsigned(16)
UINT64 = unsigned(64)

# Small bounds useful for exhaustive verification
TINY = Bounds(lo=0, hi=15)
