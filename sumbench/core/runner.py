"""Benchmark runner: repeated wall-clock timing reduced to a best (minimum) time.

Usage:
    from sumbench.core.runner import run

    result = run(np.sum, arr, seconds=1.0)
    result.best      # seconds
    print(result.summary())
"""

from __future__ import annotations

import gc
import logging
import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_SECONDS = 5.0
DEFAULT_MAX_SAMPLES = 10_000


@dataclass(frozen=True)
class BenchmarkResult:
    """Elapsed time per timed trial, in seconds, in trial order."""

    times: tuple[float, ...]
    value: Any = None
    warmup: int = 1
    label: str = ""
    budget: float = field(default=DEFAULT_SECONDS, repr=False)

    def __post_init__(self) -> None:
        if not self.times:
            raise ValueError("BenchmarkResult needs at least one sample")

    @property
    def samples(self) -> int:
        return len(self.times)

    @property
    def best(self) -> float:
        return min(self.times)

    @property
    def worst(self) -> float:
        return max(self.times)

    @property
    def median(self) -> float:
        return statistics.median(self.times)

    @property
    def mean(self) -> float:
        return statistics.fmean(self.times)

    def running_best(self) -> list[float]:
        """Best time after 1, 2, ..., ``samples`` trials (non-increasing)."""
        out: list[float] = []
        best = float("inf")
        for t in self.times:
            best = min(best, t)
            out.append(best)
        return out

    def summary(self) -> str:
        lines = [f"BenchmarkResult: {self.samples} samples"]
        if self.label:
            lines[0] += f" of {self.label}"
        lines[0] += f" ({_fmt(self.budget)} budget)"
        lines.append(f"  Time  (min ... max): {_fmt(self.best)} ... {_fmt(self.worst)}")
        lines.append(f"  Time  (median):      {_fmt(self.median)}")
        lines.append(f"  Time  (mean):        {_fmt(self.mean)}")
        return "\n".join(lines)


def _fmt(seconds: float) -> str:
    if seconds >= 1.0:
        return f"{seconds:.3f} s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f} ms"
    if seconds >= 1e-6:
        return f"{seconds * 1e6:.3f} us"
    return f"{seconds * 1e9:.1f} ns"


def run(
    fn: Callable[..., Any],
    *args: Any,
    seconds: float = DEFAULT_SECONDS,
    max_samples: int = DEFAULT_MAX_SAMPLES,
    min_samples: int = 1,
    warmup: int = 1,
    gc_between: bool = False,
    label: str = "",
    clock: Callable[[], float] = time.perf_counter,
) -> BenchmarkResult:
    """Time ``fn(*args)`` repeatedly and keep every sample.

    Trials run one after another until either ``seconds`` of wall-clock time
    have been spent sampling or ``max_samples`` trials exist, but never fewer
    than ``min_samples``. ``warmup`` untimed calls come first so one-time JIT
    compilation is not measured; the last warm-up return value is kept.

    Args:
        fn: The callable to benchmark.
        seconds: Sampling budget in seconds (warm-up excluded).
        max_samples: Upper bound on timed trials.
        min_samples: Lower bound on timed trials, even past the budget.
        warmup: Untimed calls before sampling. With ``warmup=0`` the first
            timed call's value is kept instead.
        gc_between: Run a full garbage collection before each trial.
        clock: Monotonic clock returning seconds.
    """
    if seconds <= 0:
        raise ValueError(f"seconds must be positive, got {seconds}")
    if max_samples < 1:
        raise ValueError(f"max_samples must be at least 1, got {max_samples}")
    if min_samples < 1 or min_samples > max_samples:
        raise ValueError(
            f"min_samples must be in [1, {max_samples}], got {min_samples}"
        )
    if warmup < 0:
        raise ValueError(f"warmup must be non-negative, got {warmup}")

    value = None
    for _ in range(warmup):
        value = fn(*args)

    times: list[float] = []
    deadline = clock() + seconds
    while len(times) < max_samples:
        if gc_between:
            gc.collect()
        start = clock()
        out = fn(*args)
        end = clock()
        times.append(end - start)
        if warmup == 0 and len(times) == 1:
            value = out
        if len(times) >= min_samples and end >= deadline:
            break

    logger.debug(
        "benchmarked %s: %d samples, best %.6g s",
        label or getattr(fn, "__name__", repr(fn)), len(times), min(times),
    )
    return BenchmarkResult(
        times=tuple(times), value=value, warmup=warmup, label=label, budget=seconds,
    )
