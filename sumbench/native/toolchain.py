"""Compile C source text into a temporary shared library."""

from __future__ import annotations

import logging
import os
import pathlib
import platform
import shutil
import subprocess
import sys
import tempfile

from sumbench.errors import CompileError, ToolchainUnavailable

logger = logging.getLogger(__name__)

C_SUM_SOURCE = """\
#include <stddef.h>

double c_sum(size_t n, double *X) {
    double s = 0.0;
    for (size_t i = 0; i < n; ++i) {
        s += X[i];
    }
    return s;
}
"""

_CANDIDATES = ("gcc", "cc", "clang")


def shared_library_suffix() -> str:
    if sys.platform == "win32":
        return ".dll"
    if sys.platform == "darwin":
        return ".dylib"
    return ".so"


def find_compiler(preferred: str | None = None) -> str:
    """Resolve a C compiler: explicit choice, then ``$CC``, then PATH."""
    for name in (preferred, os.environ.get("CC")):
        if name:
            path = shutil.which(name)
            if path is None:
                raise ToolchainUnavailable(f"C compiler {name!r} not found")
            return path
    for name in _CANDIDATES:
        path = shutil.which(name)
        if path is not None:
            return path
    raise ToolchainUnavailable(f"No C compiler found on PATH (tried {', '.join(_CANDIDATES)})")


def compile_flags() -> list[str]:
    flags = ["-fPIC", "-O3"]
    if platform.machine().lower() in ("x86_64", "amd64", "i386", "i686"):
        flags.append("-msse3")
    return flags


def compile_shared(
    source: str,
    *,
    compiler: str | None = None,
    output_dir: pathlib.Path | None = None,
    name: str = "csum",
) -> pathlib.Path:
    """Compile ``source`` (fed on stdin) into ``<output_dir>/<name><suffix>``.

    When ``output_dir`` is omitted a fresh temporary directory is created;
    the caller owns it and removes it when the library is closed.
    """
    cc = find_compiler(compiler)
    scratch = output_dir is None
    if scratch:
        output_dir = pathlib.Path(tempfile.mkdtemp(prefix="sumbench-"))
    out = pathlib.Path(output_dir) / f"{name}{shared_library_suffix()}"
    cmd = [cc, *compile_flags(), "-xc", "-shared", "-o", str(out), "-"]
    logger.info("compiling %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, input=source, capture_output=True, text=True)
    except OSError as exc:
        if scratch:
            shutil.rmtree(output_dir, ignore_errors=True)
        raise ToolchainUnavailable(f"Could not run {cc}: {exc}") from exc
    if proc.returncode != 0:
        if scratch:
            shutil.rmtree(output_dir, ignore_errors=True)
        raise CompileError(
            f"{os.path.basename(cc)} exited with status {proc.returncode}",
            stderr=proc.stderr,
        )
    return out
