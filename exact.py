"""
Exact Levenshtein distance between two byte buffers.

Classic dynamic programming, kept to two rolling rows sized to the
shorter buffer: memory is O(min(|A|, |B|)) and time O(|A| * |B|).
Insertion, deletion and substitution all cost 1; substituting a byte by
an equal byte costs 0.
"""

from __future__ import annotations

import logging
from array import array

from buffer import ByteBuffer
from checked import CheckedArithmetic, SIZE_ARITH
from errors import AllocationFailure

logger = logging.getLogger(__name__)

# Bytes per row entry: one size_t.
ROW_TYPECODE = "Q"
ROW_ELEMENT_WIDTH = array(ROW_TYPECODE).itemsize


def common_affixes(a: bytes, b: bytes) -> tuple[int, int]:
    """Lengths of the longest common prefix and, after it, common suffix."""
    if a == b:
        return len(a), 0
    limit = min(len(a), len(b))
    prefix = 0
    while prefix < limit and a[prefix] == b[prefix]:
        prefix += 1
    limit -= prefix
    suffix = 0
    while suffix < limit and a[-1 - suffix] == b[-1 - suffix]:
        suffix += 1
    return prefix, suffix


def row_bytes(size_small: int, arith: CheckedArithmetic) -> int:
    """Bytes in one DP row of ``size_small + 1`` entries."""
    return arith.mul(arith.inc(size_small), ROW_ELEMENT_WIDTH)


def allocate_rows(size_small: int, arith: CheckedArithmetic) -> tuple[array, array]:
    """
    Allocate the two DP rows, ``size_small + 1`` entries each.

    The first row is initialised to ``0..size_small`` (distance from the
    empty prefix); the second is zero-filled scratch.
    """
    nbytes = row_bytes(size_small, arith)
    length = size_small + 1
    try:
        row_1 = array(ROW_TYPECODE, range(length))
        row_2 = array(ROW_TYPECODE, bytes(nbytes))
    except MemoryError as e:
        raise AllocationFailure(f"could not allocate 2 x {nbytes} bytes") from e
    return row_1, row_2


def exact_distance(
    a: ByteBuffer, b: ByteBuffer, arith: CheckedArithmetic = SIZE_ARITH
) -> int:
    """Return the Levenshtein distance between ``a`` and ``b``."""
    arith.require(a.size, b.size)
    # Rows for the untrimmed inputs must fit even when trimming shrinks them.
    row_bytes(min(a.size, b.size), arith)

    data_a, data_b = a.data, b.data
    prefix, suffix = common_affixes(data_a, data_b)
    if prefix or suffix:
        try:
            data_a = data_a[prefix:len(data_a) - suffix]
            data_b = data_b[prefix:len(data_b) - suffix]
        except MemoryError as e:
            raise AllocationFailure("could not copy the trimmed inputs") from e

    if len(data_a) < len(data_b):
        small, large = data_a, data_b
    else:
        small, large = data_b, data_a
    n = len(small)

    row_1, row_2 = allocate_rows(n, arith)

    for i, byte in enumerate(large, 1):
        row_2[0] = i
        for j in range(n):
            t = row_1[j]
            if small[j] != byte:
                t += 1
            above = row_1[j + 1] + 1
            if t > above:
                t = above
            left = row_2[j] + 1
            if t > left:
                t = left
            row_2[j + 1] = t
        row_1, row_2 = row_2, row_1

    distance = row_1[n]
    logger.debug(
        "exact distance %d (sizes %d/%d, trimmed %d+%d)",
        distance, a.size, b.size, prefix, suffix,
    )
    return distance
