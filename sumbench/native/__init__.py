"""Native binding layer: compile C source, load it, bind typed symbols."""

from sumbench.native.toolchain import (
    C_SUM_SOURCE,
    compile_shared,
    find_compiler,
    shared_library_suffix,
)
from sumbench.native.loader import (
    C_SUM_SIGNATURE,
    NativeFunction,
    NativeLibrary,
    NativeSum,
    Signature,
    bind_symbol,
    load,
)

__all__ = [
    "C_SUM_SOURCE", "compile_shared", "find_compiler", "shared_library_suffix",
    "C_SUM_SIGNATURE", "NativeFunction", "NativeLibrary", "NativeSum",
    "Signature", "bind_symbol", "load",
]
