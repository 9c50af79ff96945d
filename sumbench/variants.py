"""The seven ways to sum an array, in the order they are presented.

1. C, compiled at runtime and called through ctypes
2. Python's built-in ``sum``, fetched through the runtime adapter
3. ``numpy.sum``, fetched through the runtime adapter
4. a hand-written Python loop, defined inline through the runtime adapter
5. Numba's own ``np.sum`` (the reference)
6. a hand-written Numba loop
7. the same loop with bounds checks off and fastmath reassociation (SIMD)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Union

import numpy as np
from numba import njit

from sumbench.errors import (
    CompileError,
    InlineDefinitionError,
    LibraryLoadError,
    ReferenceUnavailable,
    RuntimeUnavailable,
    SymbolNotFound,
    ToolchainUnavailable,
)
from sumbench.native.loader import NativeSum
from sumbench.runtime.adapter import ExternalRuntime, get_runtime

logger = logging.getLogger(__name__)

REFERENCE_KEY = "numba_builtin"

DECLARATIONS: tuple[tuple[str, str], ...] = (
    ("c", "C"),
    ("python_builtin", "Python - built-in"),
    ("python_numpy", "Python - numpy"),
    ("python_handwritten", "Python - hand-written"),
    ("numba_builtin", "Numba - built-in"),
    ("numba_handwritten", "Numba - hand-written"),
    ("numba_simd", "Numba - hand-written SIMD"),
)

LABELS = dict(DECLARATIONS)

PY_SUM_SOURCE = """\
def py_sum(a):
    s = 0.0
    for x in a:
        s = s + x
    return s
"""


# ---------------------------------------------------------------------------
# Numba: built-in, hand-written, hand-written with vectorization hints
# ---------------------------------------------------------------------------

@njit
def numba_builtin_sum(a):
    return np.sum(a)


@njit
def numba_sum(a):
    s = 0.0
    for x in a:
        s += x
    return s


@njit(fastmath=True, boundscheck=False)
def numba_simd_sum(a):
    # fastmath allows the accumulation to be reordered across SIMD lanes
    s = 0.0
    for i in range(a.shape[0]):
        s += a[i]
    return s


# ---------------------------------------------------------------------------
# Variant records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Variant:
    key: str
    label: str
    fn: Callable[[np.ndarray], float]
    handwritten: bool = False

    @property
    def available(self) -> bool:
        return True

    def __call__(self, a: np.ndarray) -> float:
        return float(self.fn(a))


@dataclass(frozen=True)
class Unavailable:
    """A declared variant that could not be constructed."""

    key: str
    label: str
    reason: str

    @property
    def available(self) -> bool:
        return False


Entry = Union[Variant, Unavailable]


class VariantSet:
    """Declared variants in presentation order, built or not."""

    def __init__(self, entries: list[Entry], closers: list[Callable[[], None]] | None = None):
        self._entries = list(entries)
        self._closers = list(closers or [])

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def labels(self) -> list[str]:
        return [e.label for e in self._entries]

    def get(self, key: str) -> Entry:
        for e in self._entries:
            if e.key == key:
                return e
        raise KeyError(key)

    def available(self) -> list[Variant]:
        return [e for e in self._entries if isinstance(e, Variant)]

    def unavailable(self) -> list[Unavailable]:
        return [e for e in self._entries if isinstance(e, Unavailable)]

    @property
    def reference(self) -> Variant:
        ref = self.get(REFERENCE_KEY)
        if not isinstance(ref, Variant):
            raise ReferenceUnavailable(f"Reference variant unavailable: {ref.reason}")
        return ref

    def close(self) -> None:
        while self._closers:
            self._closers.pop()()

    def __enter__(self) -> VariantSet:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _native_entry(compiler: str | None, closers: list) -> Entry:
    try:
        native = NativeSum(compiler)
    except (ToolchainUnavailable, CompileError, LibraryLoadError, SymbolNotFound) as exc:
        logger.warning("C variant unavailable: %s", exc)
        detail = getattr(exc, "stderr", "")
        if detail:
            logger.debug("compiler output:\n%s", detail)
        return Unavailable("c", LABELS["c"], str(exc))
    closers.append(native.close)
    return Variant("c", LABELS["c"], native)


def _runtime_entry(runtime: ExternalRuntime, key: str, name: str) -> Entry:
    try:
        fn = runtime.get_callable(name)
    except RuntimeUnavailable as exc:
        logger.warning("%s unavailable: %s", LABELS[key], exc)
        return Unavailable(key, LABELS[key], str(exc))
    return Variant(key, LABELS[key], fn)


def _inline_entry(runtime: ExternalRuntime, key: str, source: str, entry: str) -> Entry:
    try:
        fn = runtime.define_inline(source, entry=entry)
    except (RuntimeUnavailable, InlineDefinitionError) as exc:
        logger.warning("%s unavailable: %s", LABELS[key], exc)
        return Unavailable(key, LABELS[key], str(exc))
    return Variant(key, LABELS[key], fn, handwritten=True)


def build_variants(
    runtime: ExternalRuntime | None = None,
    compiler: str | None = None,
    native: bool = True,
) -> VariantSet:
    """Construct every declared variant.

    A variant whose prerequisites are missing (no C compiler, a module the
    runtime cannot import or define) becomes an ``Unavailable`` entry with the reason.

    Args:
        runtime: Adapter used for the Python variants (default: current runtime).
        compiler: C compiler to use instead of ``$CC``/PATH discovery.
        native: Set to False to skip compiling the C variant.
    """
    runtime = runtime or get_runtime()
    closers: list[Callable[[], None]] = []

    if native:
        c_entry = _native_entry(compiler, closers)
    else:
        c_entry = Unavailable("c", LABELS["c"], "native variant disabled")

    entries: list[Entry] = [
        c_entry,
        _runtime_entry(runtime, "python_builtin", "sum"),
        _runtime_entry(runtime, "python_numpy", "numpy.sum"),
        _inline_entry(runtime, "python_handwritten", PY_SUM_SOURCE, "py_sum"),
        Variant(REFERENCE_KEY, LABELS[REFERENCE_KEY], numba_builtin_sum),
        Variant("numba_handwritten", LABELS["numba_handwritten"], numba_sum, handwritten=True),
        Variant("numba_simd", LABELS["numba_simd"], numba_simd_sum, handwritten=True),
    ]
    return VariantSet(entries, closers)
