"""
Error taxonomy for distance computations.

Each error subclasses the matching built-in exception as well, so code
that already catches ``OverflowError`` or ``MemoryError`` keeps working.
No error is ever retried; they are propagated unchanged up to the
command line, which turns them into a message and an exit status.
"""

from __future__ import annotations


class DistanceError(Exception):
    """Base class for every failure raised by this project."""


class ArithmeticOverflow(DistanceError, OverflowError):
    """A checked operation would leave its domain."""


class DivisionByZero(ArithmeticOverflow, ZeroDivisionError):
    """A checked division or modulo had a zero divisor."""


class AllocationFailure(DistanceError, MemoryError):
    """Scratch memory for a computation could not be obtained."""


class InvalidInput(DistanceError, ValueError):
    """Malformed numeric text, or a file that could not be read in full."""
