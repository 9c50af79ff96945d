"""sumbench exception hierarchy."""

from __future__ import annotations


class SumBenchError(Exception):
    """Base exception for all sumbench errors."""


class ToolchainUnavailable(SumBenchError):
    """No usable C compiler was found."""


class CompileError(SumBenchError):
    """The C compiler rejected the source or exited with an error."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class LibraryLoadError(SumBenchError):
    """A compiled shared library could not be opened."""


class SymbolNotFound(SumBenchError):
    """A shared library does not export the requested symbol."""


class RuntimeUnavailable(SumBenchError):
    """An external runtime cannot provide the requested callable."""


class InlineDefinitionError(SumBenchError):
    """Inline source did not define exactly one usable function."""


class VerificationError(SumBenchError):
    """A variant's sum disagrees with the reference beyond tolerance."""


class ReferenceUnavailable(SumBenchError):
    """The reference variant could not be built, so nothing can be checked."""
