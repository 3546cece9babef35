"""
Upper bound on the Levenshtein distance by chunking.

Both buffers are cut into sequential chunks of at most ``chunk_size``
bytes and the i-th chunk of one is compared with the i-th chunk of the
other.  Edit distance is sub-additive over such a split, so the sum of
the chunk distances can never be smaller than the true distance, while
each exact computation only ever sees ``chunk_size`` bytes per side.
"""

from __future__ import annotations

import logging

from buffer import ByteBuffer
from checked import CheckedArithmetic, SIZE_ARITH
from exact import exact_distance

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024


def chunk_pairs(a: ByteBuffer, b: ByteBuffer, chunk_size: int = CHUNK_SIZE):
    """
    Yield ``(chunk_a, chunk_b)`` pairs until both buffers are exhausted.

    The cap for a buffer's next chunk is the size of its previous chunk,
    so once a buffer runs short its chunks only shrink from there on
    (down to empty), independently of the other buffer.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    offset_a = offset_b = 0
    size_a = min(a.size, chunk_size)
    size_b = min(b.size, chunk_size)

    while size_a or size_b:
        yield a.slice(offset_a, size_a), b.slice(offset_b, size_b)
        offset_a += size_a
        offset_b += size_b
        size_a = min(a.size - offset_a, size_a)
        size_b = min(b.size - offset_b, size_b)


def upper_bound(
    a: ByteBuffer,
    b: ByteBuffer,
    arith: CheckedArithmetic = SIZE_ARITH,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """Return a value that is never below the distance between ``a`` and ``b``."""
    arith.require(a.size, b.size)

    bound = 0
    chunks = 0
    for chunk_a, chunk_b in chunk_pairs(a, b, chunk_size):
        bound = arith.add(bound, exact_distance(chunk_a, chunk_b, arith))
        chunks += 1

    logger.debug("upper bound %d over %d chunk pairs", bound, chunks)
    return bound
