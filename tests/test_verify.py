"""Tests for sumbench.core.verify."""

import math

import pytest

from sumbench.core.verify import (
    EPS,
    assert_close,
    check_variant,
    expected_spread,
    expected_sum,
    is_close,
    is_plausible_sum,
    tolerance_for,
    verify_variants,
)
from sumbench.errors import VerificationError


class TestTolerance:
    def test_floor_for_small_n(self):
        assert tolerance_for(0) == pytest.approx(math.sqrt(EPS))
        assert tolerance_for(3) == pytest.approx(math.sqrt(EPS))

    def test_grows_with_n(self):
        sizes = [10**k for k in range(0, 24, 2)]
        tols = [tolerance_for(n) for n in sizes]
        assert tols == sorted(tols)
        assert tolerance_for(10**20) > tolerance_for(10**7)

    def test_negative_n_raises(self):
        with pytest.raises(ValueError):
            tolerance_for(-1)


class TestIsClose:
    def test_exact(self):
        assert is_close(3.0, 3.0)
        assert is_close(0.0, 0.0)

    def test_last_bits(self):
        a = 5_000_000.123456789
        b = a * (1 + 1e-12)
        assert is_close(a, b, n=10**7)

    def test_too_far(self):
        assert not is_close(5_000_000.0, 5_000_100.0, n=10**7)

    def test_nan_never_close(self):
        assert not is_close(float("nan"), float("nan"))

    def test_infinities(self):
        assert is_close(math.inf, math.inf)
        assert not is_close(math.inf, -math.inf)
        assert not is_close(math.inf, 1e308)

    def test_atol_for_values_near_zero(self):
        assert not is_close(0.0, 1e-12)
        assert is_close(0.0, 1e-12, atol=1e-9)


class TestExpectedSum:
    def test_mean(self):
        assert expected_sum(10**7) == 5_000_000.0
        assert expected_sum(0) == 0.0

    def test_spread_for_ten_million(self):
        assert 5_000 < expected_spread(10**7) < 6_000

    def test_plausible(self):
        assert is_plausible_sum(5_000_900.0, 10**7)
        assert not is_plausible_sum(5_010_000.0, 10**7)
        assert is_plausible_sum(0.0, 0)


class TestVerifyVariants:
    def test_all_pass(self):
        result = verify_variants(3.0, {"C": 3.0, "Python - numpy": 3.0}, n=3)
        assert result.passed is True
        assert len(result.checks) == 2
        assert result.failures == []

    def test_one_fails(self):
        result = verify_variants(3.0, {"C": 3.0, "broken": 4.0}, n=3)
        assert result.passed is False
        assert [c.label for c in result.failures] == ["broken"]
        assert result.get("broken").error == pytest.approx(1.0)
        assert "FAIL" in result.summary()

    def test_check_variant_fields(self):
        c = check_variant("C", 3.0, 3.0, n=3)
        assert c.passed
        assert c.tolerance == tolerance_for(3)
        assert c.message == ""

    def test_assert_close_raises(self):
        assert_close("ok", 1.0, 1.0, n=1)
        with pytest.raises(VerificationError, match="broken"):
            assert_close("broken", 1.0, 2.0, n=1)
