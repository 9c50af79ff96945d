"""sumbench: how fast is sum(a)? C, Python, numpy and Numba side by side."""

from sumbench.core import (
    DEFAULT_SIZE,
    random_array,
    as_sample,
    run,
    BenchmarkResult,
    is_close,
    verify_variants,
    ResultsTable,
    Present,
    ABSENT,
)
from sumbench.errors import (
    SumBenchError,
    ToolchainUnavailable,
    CompileError,
    LibraryLoadError,
    SymbolNotFound,
    RuntimeUnavailable,
    InlineDefinitionError,
    VerificationError,
    ReferenceUnavailable,
)
from sumbench.variants import build_variants, Variant, Unavailable, VariantSet
from sumbench.session import SessionConfig, SessionReport, run_session

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SIZE", "random_array", "as_sample",
    "run", "BenchmarkResult", "is_close", "verify_variants",
    "ResultsTable", "Present", "ABSENT",
    "SumBenchError", "ToolchainUnavailable", "CompileError", "LibraryLoadError",
    "SymbolNotFound", "RuntimeUnavailable", "InlineDefinitionError", "VerificationError",
    "ReferenceUnavailable",
    "build_variants", "Variant", "Unavailable", "VariantSet",
    "SessionConfig", "SessionReport", "run_session",
]
