"""Correctness oracle: compare each variant's sum against the reference."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from sumbench.errors import VerificationError

EPS = float(np.finfo(np.float64).eps)
SAFETY = 64.0


def tolerance_for(n: int) -> float:
    """Relative tolerance for comparing two sums of ``n`` float64 terms.

    Rounding error of a naive running sum grows like ``eps * sqrt(n)`` when
    the per-step errors are independent; the floor of ``sqrt(eps)`` keeps
    small arrays from demanding bit equality between differently ordered
    reductions.
    """
    if n < 0:
        raise ValueError(f"Term count must be non-negative, got {n}")
    return max(math.sqrt(EPS), SAFETY * EPS * math.sqrt(n))


def is_close(a: float, b: float, n: int = 0, atol: float = 0.0) -> bool:
    """``|a - b| <= atol + tolerance_for(n) * max(|a|, |b|)``."""
    a = float(a)
    b = float(b)
    if math.isnan(a) or math.isnan(b):
        return False
    if a == b:
        return True
    if math.isinf(a) or math.isinf(b):
        return False
    return abs(a - b) <= atol + tolerance_for(n) * max(abs(a), abs(b))


def expected_sum(n: int) -> float:
    """Mean of a sum of ``n`` uniform [0, 1) samples."""
    return 0.5 * n


def expected_spread(n: int) -> float:
    """Six standard deviations of a sum of ``n`` uniform [0, 1) samples."""
    return 6.0 * math.sqrt(n / 12.0)


def is_plausible_sum(total: float, n: int) -> bool:
    return abs(float(total) - expected_sum(n)) <= expected_spread(n)


@dataclass
class CheckResult:
    """Result for a single variant comparison."""

    label: str
    passed: bool
    value: float
    reference: float
    tolerance: float
    message: str = ""

    @property
    def error(self) -> float:
        return abs(self.value - self.reference)


@dataclass
class VerifyResult:
    """Aggregate verification result."""

    passed: bool = True
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def failures(self) -> list[CheckResult]:
        return [c for c in self.checks if not c.passed]

    def get(self, label: str) -> CheckResult | None:
        for c in self.checks:
            if c.label == label:
                return c
        return None

    def summary(self) -> str:
        lines: list[str] = []
        status = "PASS" if self.passed else "FAIL"
        lines.append(f"Verification: {status}")

        for c in self.checks:
            mark = "OK" if c.passed else "FAIL"
            lines.append(
                f"  [{mark}] {c.label}: {c.value!r} vs {c.reference!r} "
                f"(err={c.error:.3g}, rtol={c.tolerance:.3g})"
            )
            if c.message:
                lines.append(f"        {c.message}")

        return "\n".join(lines)


def check_variant(label: str, value: float, reference: float, n: int) -> CheckResult:
    value = float(value)
    reference = float(reference)
    rtol = tolerance_for(n)
    ok = is_close(value, reference, n)
    message = "" if ok else f"differs from reference by {abs(value - reference):.6g}"
    return CheckResult(
        label=label, passed=ok, value=value, reference=reference,
        tolerance=rtol, message=message,
    )


def verify_variants(reference: float, values: dict[str, float], n: int) -> VerifyResult:
    """Compare every ``label -> sum`` entry against ``reference``.

    Args:
        reference: The trusted sum (the built-in reduction's result).
        values: Variant label to the sum it produced, in declaration order.
        n: Number of summed terms; scales the tolerance.
    """
    result = VerifyResult()
    for label, value in values.items():
        check = check_variant(label, value, reference, n)
        result.checks.append(check)
        if not check.passed:
            result.passed = False
    return result


def assert_close(label: str, value: float, reference: float, n: int) -> None:
    check = check_variant(label, value, reference, n)
    if not check.passed:
        raise VerificationError(f"{label}: {check.message}")
