"""
Lower bound on the Levenshtein distance from byte frequencies.

Linear time, constant extra space (two 256-entry histograms).  Two
classic multiset arguments are combined and the larger one is kept:

* every surplus occurrence of a single byte value needs its own edit, so
  the largest per-value count difference is a bound;
* one edit changes the histogram difference by at most two (a
  substitution) or changes the length difference, so half of the total
  imbalance, length difference included, rounded up, is a bound.
"""

from __future__ import annotations

import logging
from collections import Counter

from buffer import ByteBuffer
from checked import CheckedArithmetic, SIZE_ARITH

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 256


def histogram(data: bytes) -> list[int]:
    """Occurrence count of every byte value in ``data``."""
    counts = Counter(data)
    return [counts[v] for v in range(ALPHABET_SIZE)]


def gap(x: int, y: int) -> int:
    return y - x if x < y else x - y


def lower_bound(
    a: ByteBuffer, b: ByteBuffer, arith: CheckedArithmetic = SIZE_ARITH
) -> int:
    """Return a value that never exceeds the distance between ``a`` and ``b``."""
    arith.require(a.size, b.size)

    freq_a = histogram(a.data)
    freq_b = histogram(b.data)
    diffs = [gap(x, y) for x, y in zip(freq_a, freq_b)]

    bound_a = max(diffs)

    total = 0
    for d in diffs:
        total = arith.add(total, d)
    total = arith.add(total, gap(a.size, b.size))
    # ceil(total / 2) without floats
    bound_b = arith.inc(arith.div(arith.dec(total), 2)) if total else 0

    bound = max(bound_a, bound_b)
    logger.debug("lower bound %d (max diff %d, half imbalance %d)", bound, bound_a, bound_b)
    return bound
