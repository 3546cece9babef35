"""
Spec conformance tests.

These test the factory's end-to-end verification:
  - A correct engine passes verification.
  - A broken engine is rejected.
  - Exhaustive verification actually checks all combinations.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from bounds import SIZE, TINY, UINT16
from buffer import EMPTY, ByteBuffer
from engine import DistanceEngine
from errors import ArithmeticOverflow
from factory import (
    EngineFactory,
    VerificationDomain,
    VerificationError,
    VerificationResult,
)
from spec import Property, Spec, bounds_spec, distance_spec, engine_specs


class OverEagerLowerBound(DistanceEngine):
    """Claims a lower bound one above the true distance."""

    def lower(self, a, b):
        return self.exact(a, b) + 1


class AsymmetricDistance(DistanceEngine):
    """Ignores the last byte of its first argument."""

    def exact(self, a, b):
        return super().exact(a.slice(0, max(a.size - 1, 0)), b)


# ---------------------------------------------------------------------------
# Spec structure
# ---------------------------------------------------------------------------

class TestSpecStructure:
    def test_distance_spec_properties(self):
        names = [p.name for p in distance_spec()]
        assert names == ["identity", "empty", "symmetry", "length_range", "triangle"]

    def test_bounds_spec_properties(self):
        names = [p.name for p in bounds_spec()]
        assert names == ["sandwich", "identity", "lower_symmetry", "length_gap"]

    def test_arity_is_inferred(self):
        spec = distance_spec()
        arities = {p.name: p.arity for p in spec}
        assert arities == {
            "identity": 1,
            "empty": 1,
            "symmetry": 2,
            "length_range": 2,
            "triangle": 3,
        }

    def test_engine_specs(self):
        assert [s.name for s in engine_specs()] == ["distance", "bounds"]
        assert len(engine_specs()[0]) == 5


# ---------------------------------------------------------------------------
# Verification domain
# ---------------------------------------------------------------------------

class TestVerificationDomain:
    def test_default_width(self):
        domain = VerificationDomain()
        assert domain.width == 1 + 2 + 4 + 8
        assert len(domain.buffers()) == domain.width

    def test_buffers_are_distinct_and_ordered_by_length(self):
        bufs = VerificationDomain(alphabet=b"xy", max_length=2).buffers()
        assert [b.data for b in bufs] == [b"", b"x", b"y", b"xx", b"xy", b"yx", b"yy"]

    def test_zero_length_domain(self):
        assert VerificationDomain(max_length=0).buffers() == [EMPTY]

    def test_invalid_domains(self):
        with pytest.raises(ValueError):
            VerificationDomain(alphabet=b"")
        with pytest.raises(ValueError):
            VerificationDomain(max_length=-1)


# ---------------------------------------------------------------------------
# Factory produces verified engines
# ---------------------------------------------------------------------------

class TestFactoryProducesVerified:
    def test_default_engine(self):
        engine = EngineFactory.create()
        assert isinstance(engine, DistanceEngine)
        assert engine.bounds == SIZE

    def test_small_chunks(self):
        engine = EngineFactory.create(chunk_size=1)
        assert engine.chunk_size == 1

    def test_narrow_bounds(self):
        engine = EngineFactory.create(bounds=UINT16)
        assert engine.bounds == UINT16

    def test_bounds_too_narrow_for_rows(self):
        # two-entry rows need 2 * 8 bytes, TINY stops at 15
        with pytest.raises(ArithmeticOverflow):
            EngineFactory.create(bounds=TINY)


# ---------------------------------------------------------------------------
# Factory rejects broken engines
# ---------------------------------------------------------------------------

class TestFactoryRejectsBroken:
    def test_overeager_lower_bound_rejected(self):
        with pytest.raises(VerificationError) as exc_info:
            EngineFactory._verify_all(OverEagerLowerBound(), VerificationDomain())
        report = exc_info.value.report
        assert report.spec_name == "bounds"
        assert not report.passed
        assert report.results[0].property_name == "sandwich"
        assert report.results[0].counterexample == (b"", b"")

    def test_asymmetric_distance_rejected(self):
        engine = AsymmetricDistance()
        report = EngineFactory._verify_spec(distance_spec(), engine, VerificationDomain())
        assert not report.passed
        failed = [r.property_name for r in report.results if not r.passed]
        assert "symmetry" in failed

    def test_report_summary(self):
        bad_spec = Spec(name="bad")
        bad_spec.add(Property(
            name="always_one",
            description="d(a, b) == 1",
            predicate=lambda eng, a, b: eng.exact(a, b) == 1,
        ))
        report = EngineFactory._verify_spec(bad_spec, DistanceEngine(), VerificationDomain())
        assert not report.passed
        assert report.results[0].counterexample is not None
        summary = report.summary()
        assert "--- bad ---" in summary
        assert "[FAIL] always_one" in summary
        assert "FAILED" in summary

    def test_result_repr(self):
        ok = VerificationResult(property_name="symmetry", passed=True, tests_run=9)
        assert repr(ok) == "[PASS] symmetry (9 tests)"


# ---------------------------------------------------------------------------
# Exhaustive and sampled verification coverage
# ---------------------------------------------------------------------------

class TestCoverage:
    domain = VerificationDomain()

    def _run(self, prop, domain=None):
        return EngineFactory._verify_property(prop, DistanceEngine(), domain or self.domain)

    def test_identity_checks_all_singles(self):
        result = self._run(distance_spec().properties[0])
        assert result.passed
        assert result.tests_run == self.domain.width  # 15

    def test_symmetry_checks_all_pairs(self):
        result = self._run(distance_spec().properties[2])
        assert result.passed
        assert result.tests_run == self.domain.width**2  # 225

    def test_triangle_checks_all_triples(self):
        result = self._run(distance_spec().properties[4])
        assert result.passed
        assert result.tests_run == self.domain.width**3  # 3375

    def test_large_domain_falls_back_to_sampling(self):
        domain = VerificationDomain(alphabet=b"abc", max_length=3)  # width 40
        result = self._run(distance_spec().properties[4], domain)
        assert result.passed
        assert result.tests_run == EngineFactory.SAMPLE_COUNT
