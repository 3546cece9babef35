"""
Checked arithmetic over a Bounds domain.

Each operation is a plain method that:
  1. Rejects operands that are not in the domain
  2. Performs the computation only once it is known to fit
  3. Raises instead of wrapping, clamping or truncating

Every other module routes the additions, subtractions and
multiplications that could overflow on attacker-sized inputs through a
``CheckedArithmetic`` instance.
"""

from __future__ import annotations

from dataclasses import dataclass

from bounds import Bounds, SIZE
from errors import ArithmeticOverflow, DivisionByZero, InvalidInput

DECIMAL_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class CheckedArithmetic:
    """
    Arithmetic whose every result is either exact and within the
    configured bounds, or an error.
    """

    bounds: Bounds = SIZE

    # -- internal helpers -------------------------------------------------

    def require(self, *values: int) -> None:
        """Reject operands outside the domain."""
        for v in values:
            if not self.bounds.contains(v):
                raise ArithmeticOverflow(
                    f"{v} is outside bounds [{self.bounds.lo}, {self.bounds.hi}]"
                )

    # -- core operations --------------------------------------------------

    def add(self, a: int, b: int) -> int:
        self.require(a, b)
        if self.bounds.hi - a < b:
            raise ArithmeticOverflow(f"{a} + {b} exceeds {self.bounds.hi}")
        return a + b

    def sub(self, a: int, b: int) -> int:
        self.require(a, b)
        if a - self.bounds.lo < b:
            raise ArithmeticOverflow(f"{a} - {b} is below {self.bounds.lo}")
        return a - b

    def mul(self, a: int, b: int) -> int:
        self.require(a, b)
        # Guard by division so the check itself never forms the product.
        if a != 0 and self.bounds.hi // a < b:
            raise ArithmeticOverflow(f"{a} * {b} exceeds {self.bounds.hi}")
        return a * b

    def div(self, a: int, b: int) -> int:
        self.require(a, b)
        if b == 0:
            raise DivisionByZero("division by zero")
        return a // b

    def mod(self, a: int, b: int) -> int:
        self.require(a, b)
        if b == 0:
            raise DivisionByZero("modulo by zero")
        return a % b

    # -- convenience ------------------------------------------------------

    def inc(self, a: int) -> int:
        return self.add(a, 1)

    def dec(self, a: int) -> int:
        return self.sub(a, 1)

    def parse(self, text: str) -> int:
        """
        Parse a sign-free decimal string into a value of the domain.

        Only ASCII digits are accepted, so ``"+1"``, ``" 1"``, ``"1_0"``
        and non-ASCII digits are all rejected.  A run of zeros is
        answered directly without going through ``int()``.
        """
        if not isinstance(text, str):
            raise InvalidInput(f"expected a string, got {type(text).__name__}")
        if not text:
            raise InvalidInput("empty number")
        if text[0] in "+-":
            raise InvalidInput(f"signed number not accepted: {text!r}")
        if not DECIMAL_DIGITS.issuperset(text):
            raise InvalidInput(f"not a decimal number: {text!r}")
        if text.strip("0") == "":
            value = 0
        else:
            # Reject obviously oversized input before int() sees it.
            if len(text.lstrip("0")) > self.bounds.digits:
                raise InvalidInput(f"{text!r} exceeds {self.bounds.hi}")
            value = int(text, 10)
        if not self.bounds.contains(value):
            raise InvalidInput(
                f"{text!r} is outside bounds [{self.bounds.lo}, {self.bounds.hi}]"
            )
        return value


SIZE_ARITH = CheckedArithmetic(bounds=SIZE)
