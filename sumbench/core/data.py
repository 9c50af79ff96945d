"""Sample array generation: one read-only float64 vector shared by every variant."""

from __future__ import annotations

from typing import Iterable

import numpy as np

DEFAULT_SIZE = 10**7


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr = np.ascontiguousarray(arr, dtype=np.float64)
    arr.flags.writeable = False
    return arr


def random_array(n: int = DEFAULT_SIZE, seed: int | None = None) -> np.ndarray:
    """Return ``n`` i.i.d. samples uniform on [0, 1) as a read-only float64 array."""
    if n < 0:
        raise ValueError(f"Array size must be non-negative, got {n}")
    rng = np.random.default_rng(seed)
    return _freeze(rng.random(n, dtype=np.float64))


def as_sample(values: Iterable[float] | np.ndarray) -> np.ndarray:
    """Coerce caller data into the same read-only contiguous float64 form."""
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"Sample must be one-dimensional, got shape {arr.shape}")
    return _freeze(arr)
