"""sumbench core: sample data, benchmark runner, correctness oracle, results table."""

from sumbench.core.data import DEFAULT_SIZE, random_array, as_sample
from sumbench.core.runner import BenchmarkResult, run
from sumbench.core.verify import (
    tolerance_for, is_close, expected_sum, expected_spread, is_plausible_sum,
    check_variant, verify_variants, assert_close, CheckResult, VerifyResult,
)
from sumbench.core.table import Present, Absent, ABSENT, best_time, ResultsRow, ResultsTable

__all__ = [
    "DEFAULT_SIZE", "random_array", "as_sample",
    "BenchmarkResult", "run",
    "tolerance_for", "is_close", "expected_sum", "expected_spread", "is_plausible_sum",
    "check_variant", "verify_variants", "assert_close", "CheckResult", "VerifyResult",
    "Present", "Absent", "ABSENT", "best_time", "ResultsRow", "ResultsTable",
]
