"""Native binding layer: load a shared library and bind typed symbols.

Usage:
    from sumbench.native.loader import load, bind_symbol, C_SUM_SIGNATURE

    lib = load(path)
    c_sum = bind_symbol(lib, "c_sum", C_SUM_SIGNATURE)
    c_sum(len(arr), arr)
"""

from __future__ import annotations

import ctypes
import logging
import pathlib
import shutil
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.ctypeslib import ndpointer

from sumbench.errors import LibraryLoadError, SymbolNotFound
from sumbench.native.toolchain import C_SUM_SOURCE, compile_shared

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Signature:
    """C signature: return type and argument types, fixed at bind time."""

    restype: Any
    argtypes: tuple[Any, ...]


Float64Buffer = ndpointer(dtype=np.float64, ndim=1, flags="C_CONTIGUOUS")

C_SUM_SIGNATURE = Signature(restype=ctypes.c_double, argtypes=(ctypes.c_size_t, Float64Buffer))


class NativeLibrary:
    """An opened shared library, optionally owning its build directory."""

    def __init__(self, path: pathlib.Path, handle: ctypes.CDLL, owned_dir: pathlib.Path | None = None):
        self.path = path
        self.handle = handle
        self._owned_dir = owned_dir

    def close(self) -> None:
        if self._owned_dir is None:
            return
        try:
            shutil.rmtree(self._owned_dir)
        except OSError as exc:
            logger.warning("could not remove %s: %s", self._owned_dir, exc)
        self._owned_dir = None

    def __enter__(self) -> NativeLibrary:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class NativeFunction:
    """A bound symbol; argument conversion is checked by ctypes on every call."""

    def __init__(self, name: str, fn: Any, signature: Signature):
        self.name = name
        self.signature = signature
        self._fn = fn

    def __call__(self, *args: Any) -> Any:
        return self._fn(*args)

    def __repr__(self) -> str:
        return f"NativeFunction({self.name!r})"


def load(path: str | pathlib.Path, owned_dir: pathlib.Path | None = None) -> NativeLibrary:
    path = pathlib.Path(path)
    try:
        handle = ctypes.CDLL(str(path))
    except OSError as exc:
        raise LibraryLoadError(f"Could not load {path}: {exc}") from exc
    return NativeLibrary(path, handle, owned_dir)


def bind_symbol(library: NativeLibrary, name: str, signature: Signature) -> NativeFunction:
    try:
        fn = getattr(library.handle, name)
    except AttributeError as exc:
        raise SymbolNotFound(f"{library.path} has no symbol {name!r}") from exc
    fn.restype = signature.restype
    fn.argtypes = list(signature.argtypes)
    return NativeFunction(name, fn, signature)


class NativeSum:
    """``c_sum`` compiled on construction and called with ``(len(a), a)``."""

    def __init__(self, compiler: str | None = None):
        so_path = compile_shared(C_SUM_SOURCE, compiler=compiler)
        try:
            self.library = load(so_path, owned_dir=so_path.parent)
        except LibraryLoadError:
            shutil.rmtree(so_path.parent, ignore_errors=True)
            raise
        try:
            self._c_sum = bind_symbol(self.library, "c_sum", C_SUM_SIGNATURE)
        except SymbolNotFound:
            self.library.close()
            raise

    def __call__(self, a: np.ndarray) -> float:
        return self._c_sum(len(a), a)

    def close(self) -> None:
        self.library.close()
