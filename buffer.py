"""Immutable byte buffers and loading them from files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from bounds import SIZE
from errors import AllocationFailure, InvalidInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ByteBuffer:
    """An owned, immutable byte sequence with a known size."""

    data: bytes = b""

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            # Freeze bytearray/memoryview input into an owned copy.
            object.__setattr__(self, "data", bytes(self.data))

    @property
    def size(self) -> int:
        return len(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def slice(self, offset: int, size: int) -> "ByteBuffer":
        """Sub-buffer of at most ``size`` bytes starting at ``offset``."""
        if offset < 0 or size < 0:
            raise ValueError(f"negative slice ({offset}, {size})")
        try:
            return ByteBuffer(self.data[offset:offset + size])
        except MemoryError as e:
            raise AllocationFailure(f"could not copy {size} bytes") from e


EMPTY = ByteBuffer()


def load(path: str | PathLike, max_size: int = SIZE.hi) -> ByteBuffer:
    """
    Read at most ``max_size`` bytes of the file at ``path``.

    A file larger than the cap is truncated to its first ``max_size``
    bytes.  A path that cannot be opened, or a read that returns fewer
    bytes than the size determined up front, raises ``InvalidInput``;
    running out of memory for the contents raises ``AllocationFailure``.
    """
    if not SIZE.contains(max_size):
        raise InvalidInput(f"max_size {max_size} is outside [0, {SIZE.hi}]")

    path = Path(path)
    try:
        with path.open("rb") as fh:
            size = min(path.stat().st_size, max_size)
            data = fh.read(size)
    except OSError as e:
        raise InvalidInput(f"could not read {path}: {e}") from e
    except MemoryError as e:
        raise AllocationFailure(f"could not hold the contents of {path}") from e

    if len(data) != size:
        raise InvalidInput(
            f"short read on {path}: expected {size} bytes, got {len(data)}"
        )

    logger.debug("loaded %d bytes from %s (cap %d)", size, path, max_size)
    return ByteBuffer(data)
