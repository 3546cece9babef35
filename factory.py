"""
The engine factory.

The factory does NOT just construct engines - it *verifies* them
against their specs before releasing them.

Flow:
  1. Caller requests an engine for a given Bounds (and chunk size).
  2. Factory builds the DistanceEngine.
  3. Factory runs every property of every spec over a small domain of
     byte strings.
  4. If verification passes  -> return the engine.
     If verification fails   -> raise, never hand out a broken instance.

The verification domain is every byte string over a short alphabet up
to a maximum length.  Small domains are checked exhaustively; larger
ones fall back to seeded random sampling plus the edge cases.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field

from bounds import Bounds, SIZE
from buffer import ByteBuffer
from engine import DistanceEngine
from spec import Property, Spec, engine_specs
from upper import CHUNK_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationDomain:
    """All byte strings over ``alphabet`` of length 0..``max_length``."""

    alphabet: bytes = b"ab"
    max_length: int = 3

    def __post_init__(self):
        if not self.alphabet:
            raise ValueError("alphabet must not be empty")
        if self.max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {self.max_length}")

    @property
    def width(self) -> int:
        """Number of distinct buffers in the domain."""
        k = len(self.alphabet)
        return sum(k**n for n in range(self.max_length + 1))

    def buffers(self) -> list[ByteBuffer]:
        out = []
        for n in range(self.max_length + 1):
            for combo in itertools.product(self.alphabet, repeat=n):
                out.append(ByteBuffer(bytes(combo)))
        return out


@dataclass
class VerificationResult:
    """Outcome of verifying one property."""

    property_name: str
    passed: bool
    counterexample: tuple | None = None
    tests_run: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        return f"[{status}] {self.property_name} ({self.tests_run} tests){ce}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying an entire spec."""

    spec_name: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def summary(self) -> str:
        lines = [f"--- {self.spec_name} ---"]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when an engine fails its spec."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class EngineFactory:
    """
    Produces DistanceEngine instances that are proven correct on the
    verification domain.
    """

    EXHAUSTIVE_THRESHOLD = 4096  # max input combinations for brute force
    SAMPLE_COUNT = 2000
    SEED = 0

    @classmethod
    def create(
        cls,
        bounds: Bounds = SIZE,
        chunk_size: int = CHUNK_SIZE,
        domain: VerificationDomain | None = None,
    ) -> DistanceEngine:
        """Build, verify, and return a DistanceEngine."""
        engine = DistanceEngine(bounds=bounds, chunk_size=chunk_size)
        cls._verify_all(engine, domain or VerificationDomain())
        return engine

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_all(cls, engine: DistanceEngine, domain: VerificationDomain) -> None:
        for spec in engine_specs():
            report = cls._verify_spec(spec, engine, domain)
            logger.debug("%s", report.summary())
            if not report.passed:
                raise VerificationError(report)

    @classmethod
    def _verify_spec(
        cls, spec: Spec, engine: DistanceEngine, domain: VerificationDomain
    ) -> VerificationReport:
        report = VerificationReport(spec_name=spec.name)
        for prop in spec:
            report.results.append(cls._verify_property(prop, engine, domain))
        return report

    @classmethod
    def _verify_property(
        cls, prop: Property, engine: DistanceEngine, domain: VerificationDomain
    ) -> VerificationResult:
        arity = prop.arity
        values = domain.buffers()

        if domain.width**arity <= cls.EXHAUSTIVE_THRESHOLD:
            combos = itertools.product(values, repeat=arity)
        else:
            combos = _generate_samples(values, arity, cls.SAMPLE_COUNT, cls.SEED)

        tests_run = 0
        for combo in combos:
            tests_run += 1
            if not prop.check(engine, *combo):
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=tuple(buf.data for buf in combo),
                    tests_run=tests_run,
                )

        return VerificationResult(
            property_name=prop.name,
            passed=True,
            tests_run=tests_run,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _generate_samples(
    values: list[ByteBuffer], arity: int, count: int, seed: int
) -> list[tuple[ByteBuffer, ...]]:
    """Edge-case combinations first, then seeded random fill."""
    rng = random.Random(seed)
    edge_values = [values[0], values[1], values[-1]] if len(values) > 2 else values

    samples: list[tuple[ByteBuffer, ...]] = list(
        itertools.product(edge_values, repeat=arity)
    )
    while len(samples) < count:
        samples.append(tuple(rng.choice(values) for _ in range(arity)))
    return samples
