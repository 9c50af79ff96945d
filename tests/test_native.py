"""Tests for the native binding layer: toolchain, loader, NativeSum."""

import ctypes
import sys

import numpy as np
import pytest

from sumbench.core.data import as_sample
from sumbench.errors import CompileError, LibraryLoadError, SumBenchError, SymbolNotFound, ToolchainUnavailable
from sumbench.native.loader import C_SUM_SIGNATURE, bind_symbol, load
from sumbench.native.toolchain import (
    C_SUM_SOURCE,
    compile_flags,
    compile_shared,
    find_compiler,
    shared_library_suffix,
)


# ═══════════════════════════════════════════════════════════════════════════
# 1. Toolchain
# ═══════════════════════════════════════════════════════════════════════════

class TestToolchain:
    def test_suffix(self):
        expected = {"win32": ".dll", "darwin": ".dylib"}.get(sys.platform, ".so")
        assert shared_library_suffix() == expected

    def test_flags(self):
        flags = compile_flags()
        assert "-fPIC" in flags
        assert "-O3" in flags

    def test_source_declares_c_sum(self):
        assert "double c_sum(size_t n, double *X)" in C_SUM_SOURCE

    def test_unknown_preferred_compiler(self):
        with pytest.raises(ToolchainUnavailable, match="not found"):
            find_compiler("definitely-not-a-compiler-xyz")

    def test_unknown_cc_env(self, monkeypatch):
        monkeypatch.setenv("CC", "definitely-not-a-compiler-xyz")
        with pytest.raises(ToolchainUnavailable):
            find_compiler()

    def test_empty_path(self, monkeypatch):
        monkeypatch.delenv("CC", raising=False)
        monkeypatch.setenv("PATH", "")
        with pytest.raises(ToolchainUnavailable, match="No C compiler"):
            find_compiler()

    def test_compile_error_keeps_stderr(self, cc):
        with pytest.raises(CompileError) as info:
            compile_shared("this is not C at all;", compiler=cc)
        assert info.value.stderr


# ═══════════════════════════════════════════════════════════════════════════
# 2. Loader
# ═══════════════════════════════════════════════════════════════════════════

class TestLoader:
    def test_load_missing_file(self, tmp_path):
        with pytest.raises(LibraryLoadError):
            load(tmp_path / f"missing{shared_library_suffix()}")

    def test_missing_symbol(self, native_sum):
        with pytest.raises(SymbolNotFound):
            bind_symbol(native_sum.library, "no_such_symbol", C_SUM_SIGNATURE)

    def test_signature_installed_once(self, native_sum):
        fn = bind_symbol(native_sum.library, "c_sum", C_SUM_SIGNATURE)
        assert fn.signature is C_SUM_SIGNATURE
        assert fn(3, as_sample([1.0, 2.0, 3.0])) == 6.0

    def test_wrong_dtype_rejected(self, native_sum):
        with pytest.raises(ctypes.ArgumentError):
            native_sum(np.ones(4, dtype=np.float32))

    def test_wrong_rank_rejected(self, native_sum):
        with pytest.raises(ctypes.ArgumentError):
            native_sum(np.ones((2, 2)))


# ═══════════════════════════════════════════════════════════════════════════
# 3. NativeSum
# ═══════════════════════════════════════════════════════════════════════════

class TestNativeSum:
    def test_three_ones(self, native_sum):
        assert native_sum(as_sample([1.0, 1.0, 1.0])) == 3.0

    def test_empty(self, native_sum):
        assert native_sum(as_sample([])) == 0.0

    def test_returns_float(self, native_sum):
        assert type(native_sum(as_sample([0.5]))) is float

    def test_close_removes_build_dir(self):
        from sumbench.native.loader import NativeSum
        try:
            ns = NativeSum()
        except SumBenchError as e:
            pytest.skip(f"C variant unavailable: {e}")
        build_dir = ns.library.path.parent
        assert build_dir.exists()
        ns.close()
        assert not build_dir.exists()
        ns.close()
