"""External runtime adapters."""

from sumbench.runtime.adapter import (
    ExternalRuntime,
    ForeignCallable,
    PythonRuntime,
    get_runtime,
    get_runtime_name,
    set_runtime,
)

__all__ = [
    "ExternalRuntime", "ForeignCallable", "PythonRuntime",
    "get_runtime", "get_runtime_name", "set_runtime",
]
