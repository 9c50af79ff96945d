"""External runtime adapters: obtain callables from another interpreter.

Usage:
    from sumbench.runtime.adapter import get_runtime

    rt = get_runtime()                      # the embedded CPython runtime
    pysum = rt.get_callable("sum")          # built-in
    npsum = rt.get_callable("numpy.sum")    # library function
    mysum = rt.define_inline("def f(a):\\n    return 0.0\\n")
"""

from __future__ import annotations

import abc
import builtins
import importlib
import inspect
from typing import Any, Callable

from sumbench.errors import InlineDefinitionError, RuntimeUnavailable


class ForeignCallable:
    """A callable handed out by a runtime; results come back as Python floats."""

    def __init__(self, qualname: str, fn: Callable[..., Any], runtime: str):
        self.qualname = qualname
        self.runtime = runtime
        self.__name__ = qualname
        self._fn = fn

    def __call__(self, *args: Any) -> float:
        return float(self._fn(*args))

    def __repr__(self) -> str:
        return f"<{self.runtime}:{self.qualname}>"


class ExternalRuntime(abc.ABC):
    """Source of callables that live in some other runtime."""

    name: str = "external"

    @abc.abstractmethod
    def get_callable(self, name: str) -> ForeignCallable:
        """Return a named callable, or raise RuntimeUnavailable."""

    @abc.abstractmethod
    def define_inline(self, source: str, entry: str | None = None) -> ForeignCallable:
        """Define a function from source text in the runtime's own syntax."""

    def is_available(self, name: str) -> bool:
        try:
            self.get_callable(name)
        except RuntimeUnavailable:
            return False
        return True


class PythonRuntime(ExternalRuntime):
    """The embedded CPython interpreter."""

    name = "python"

    def get_callable(self, name: str) -> ForeignCallable:
        module_name, _, attr = name.rpartition(".")
        if module_name:
            try:
                owner: Any = importlib.import_module(module_name)
            except ImportError as exc:
                raise RuntimeUnavailable(f"{self.name}: cannot import {module_name!r}: {exc}") from exc
        else:
            owner = builtins
        fn = getattr(owner, attr, None)
        if fn is None or not callable(fn):
            raise RuntimeUnavailable(f"{self.name}: {name!r} is not a callable")
        return ForeignCallable(name, fn, self.name)

    def define_inline(self, source: str, entry: str | None = None) -> ForeignCallable:
        try:
            code = compile(source, "<inline>", "exec")
        except SyntaxError as exc:
            raise InlineDefinitionError(f"Inline source does not parse: {exc}") from exc
        namespace: dict[str, Any] = {"__builtins__": builtins, "__name__": "__inline__"}
        exec(code, namespace)

        functions = {
            k: v for k, v in namespace.items()
            if inspect.isfunction(v) and v.__module__ == "__inline__"
        }
        if entry is not None:
            if entry not in functions:
                raise InlineDefinitionError(f"Inline source does not define {entry!r}")
            return ForeignCallable(entry, functions[entry], self.name)
        if len(functions) != 1:
            raise InlineDefinitionError(
                f"Inline source must define exactly one function, found {sorted(functions)}"
            )
        (fname, fn), = functions.items()
        return ForeignCallable(fname, fn, self.name)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_RUNTIMES: dict[str, type[ExternalRuntime]] = {"python": PythonRuntime}
_current_runtime: str = "python"


def get_runtime(name: str | None = None) -> ExternalRuntime:
    """Return an instance of the named (or current) runtime."""
    name = name or _current_runtime
    if name not in _RUNTIMES:
        raise ValueError(f"Unknown runtime: {name!r}. Must be one of {set(_RUNTIMES)}")
    return _RUNTIMES[name]()


def set_runtime(name: str) -> None:
    global _current_runtime
    if name not in _RUNTIMES:
        raise ValueError(f"Unknown runtime: {name!r}. Must be one of {set(_RUNTIMES)}")
    _current_runtime = name


def get_runtime_name() -> str:
    return _current_runtime
