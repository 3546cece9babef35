"""Shared fixtures for distance tests."""

from __future__ import annotations

import os
import random
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from bounds import UINT8
from checked import CheckedArithmetic
from engine import DistanceEngine


@pytest.fixture
def engine() -> DistanceEngine:
    return DistanceEngine()


@pytest.fixture
def uint8_arith() -> CheckedArithmetic:
    return CheckedArithmetic(bounds=UINT8)


@pytest.fixture
def write_file(tmp_path):
    """Write bytes to a fresh file under tmp_path and return its path."""
    counter = iter(range(1_000_000))

    def _write(data: bytes, name: str | None = None):
        path = tmp_path / (name or f"file{next(counter)}.bin")
        with open(path, "wb") as fh:
            fh.write(data)
        return path

    return _write


@pytest.fixture
def random_bytes():
    """Deterministic pseudo-random bytes drawn from a byte-value range."""

    def _make(size: int, seed: int = 0, lo: int = 0, hi: int = 255) -> bytes:
        rng = random.Random(seed)
        return bytes(rng.randint(lo, hi) for _ in range(size))

    return _make


class _ExhaustedHandle:
    """File handle whose read cannot get memory for its result."""

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def read(self, size=-1):
        raise MemoryError


@pytest.fixture
def exhausted_reads(monkeypatch):
    """Make every ``Path.open`` return a handle whose read runs out of memory."""
    from pathlib import Path

    monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: _ExhaustedHandle())
