"""The walkthrough: generate data, benchmark every variant, verify, tabulate.

Usage:
    from sumbench.session import SessionConfig, run_session

    report = run_session(SessionConfig(size=10**6, seconds=1.0))
    print(report.sorted_table)
    report.raise_for_failures()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from sumbench.core.data import DEFAULT_SIZE, random_array
from sumbench.core.runner import DEFAULT_MAX_SAMPLES, DEFAULT_SECONDS, BenchmarkResult, run
from sumbench.core.table import ResultsTable
from sumbench.core.verify import (
    VerifyResult,
    check_variant,
    expected_spread,
    expected_sum,
    is_plausible_sum,
)
from sumbench.errors import VerificationError
from sumbench.variants import Unavailable, Variant, build_variants

logger = logging.getLogger(__name__)

SECTIONS: dict[str, tuple[str, str]] = {
    "c": (
        "1. The C language",
        "C is the usual yardstick. The routine below is compiled right now with\n"
        "the system compiler and called through ctypes with (length, pointer).",
    ),
    "python_builtin": (
        "2. Python's built-in sum",
        "Each element is boxed into a Python float before it is added.",
    ),
    "python_numpy": (
        "3. Python: numpy",
        "numpy.sum is optimized C that can use SIMD instructions.",
    ),
    "python_handwritten": (
        "4. Python, hand-written",
        "An explicit loop run by the interpreter: dispatch overhead on every element.",
    ),
    "numba_builtin": (
        "5. Numba (built-in)",
        "np.sum inside @njit is Numba's own reduction, compiled from Python source.",
    ),
    "numba_handwritten": (
        "6. Numba (hand-written)",
        "The same loop as section 4, compiled by Numba.",
    ),
    "numba_simd": (
        "7. Numba (hand-written, processor parallelism)",
        "Bounds checks off and fastmath on: the compiler may reorder the additions\n"
        "across SIMD lanes, so the last bits can differ from a sequential loop.",
    ),
}


@dataclass(frozen=True)
class SessionConfig:
    size: int = DEFAULT_SIZE
    seconds: float = DEFAULT_SECONDS
    max_samples: int = DEFAULT_MAX_SAMPLES
    seed: int | None = None
    native: bool = True
    compiler: str | None = None
    tablefmt: str = "github"


@dataclass
class SessionReport:
    config: SessionConfig
    reference: float
    table: ResultsTable
    sorted_table: ResultsTable
    results: dict[str, BenchmarkResult] = field(default_factory=dict)
    verification: VerifyResult = field(default_factory=VerifyResult)
    unavailable: list[Unavailable] = field(default_factory=list)

    @property
    def failures(self) -> list[str]:
        return [c.label for c in self.verification.failures]

    def raise_for_failures(self) -> None:
        if self.failures:
            raise VerificationError(
                "Variants disagree with the reference:\n" + self.verification.summary()
            )


def _banner(out: Callable[[str], None], title: str) -> None:
    out("")
    out(title)
    out("=" * len(title))


def run_session(
    config: SessionConfig | None = None,
    out: Callable[[str], None] = print,
) -> SessionReport:
    """Run the whole walkthrough once, top to bottom.

    Variants run strictly one after another. A variant that cannot be built
    is shown as absent; one whose sum disagrees with the reference is recorded
    as a verification failure and also shown as absent.
    """
    config = config or SessionConfig()
    n = config.size

    _banner(out, "sum: an easy enough function to understand")
    a = random_array(n, config.seed)
    out(f"a = {n:,} random numbers, uniform on [0, 1)")

    variants = build_variants(compiler=config.compiler, native=config.native)
    try:
        reference = variants.reference(a)
        out(f"sum(a) = {reference!r}")
        out(f"expected about {expected_sum(n):,.1f} (+/- {expected_spread(n):,.0f}), "
            "since the mean of each entry is 0.5")
        if not is_plausible_sum(reference, n):
            logger.warning("reference sum %r is implausible for n=%d", reference, n)

        _banner(out, "Benchmarking a few ways in a few languages")
        results: dict[str, BenchmarkResult] = {}
        verification = VerifyResult()
        unavailable: list[Unavailable] = []

        for i, entry in enumerate(variants, start=1):
            title, blurb = SECTIONS[entry.key]
            _banner(out, title)
            out(blurb)

            if isinstance(entry, Unavailable):
                out(f"skipped: {entry.reason}")
                unavailable.append(entry)
            else:
                _measure(entry, a, config, reference, results, verification, out)

            partial = ResultsTable.from_benchmarks(variants.labels[:i], results)
            out("")
            out(partial.render(config.tablefmt))

        table = ResultsTable.from_benchmarks(variants.labels, results)
        sorted_table = table.sort_by_best()

        _banner(out, "Summary")
        out("The results again, sorted by runtime:")
        out("")
        out(sorted_table.render(config.tablefmt))
        if not verification.passed:
            out("")
            out(verification.summary())
    finally:
        variants.close()

    return SessionReport(
        config=config,
        reference=reference,
        table=table,
        sorted_table=sorted_table,
        results=results,
        verification=verification,
        unavailable=unavailable,
    )


def _measure(
    variant: Variant,
    a,
    config: SessionConfig,
    reference: float,
    results: dict[str, BenchmarkResult],
    verification: VerifyResult,
    out: Callable[[str], None],
) -> None:
    bench = run(
        variant, a,
        seconds=config.seconds,
        max_samples=config.max_samples,
        label=variant.label,
    )
    check = check_variant(variant.label, bench.value, reference, len(a))
    verification.checks.append(check)
    out(f"{variant.label}(a) = {check.value!r}")
    out(bench.summary())
    if check.passed:
        results[variant.label] = bench
    else:
        verification.passed = False
        logger.error("%s: %s", variant.label, check.message)
        out(f"FAILED: {check.message}; not entered in the results table")
