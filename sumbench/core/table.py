"""Results table: (label, best time) rows with an explicit "not run" tag."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from tabulate import tabulate

from sumbench.core.runner import BenchmarkResult


# ---------------------------------------------------------------------------
# Best time: Present(seconds) | ABSENT
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Present:
    """A measured best time in seconds."""

    seconds: float

    def __post_init__(self) -> None:
        s = float(self.seconds)
        if math.isnan(s) or s < 0:
            raise ValueError(f"Best time must be a non-negative number, got {self.seconds!r}")
        object.__setattr__(self, "seconds", s)

    @property
    def is_present(self) -> bool:
        return True

    @property
    def milliseconds(self) -> float:
        return self.seconds * 1e3

    def sort_key(self) -> tuple[int, float]:
        return (0, self.seconds)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, (Present, Absent)):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"{self.milliseconds:.3f} ms"


@dataclass(frozen=True)
class Absent:
    """The variant was not run (or its result was not validated)."""

    @property
    def is_present(self) -> bool:
        return False

    def sort_key(self) -> tuple[int, float]:
        return (1, 0.0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, (Present, Absent)):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return "n/a"


ABSENT = Absent()

BestTime = Union[Present, Absent]


def best_time(value: float | BestTime | BenchmarkResult | None) -> BestTime:
    """Normalise seconds, a benchmark result, or None into a BestTime."""
    if isinstance(value, (Present, Absent)):
        return value
    if value is None:
        return ABSENT
    if isinstance(value, BenchmarkResult):
        return Present(value.best)
    return Present(value)


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ResultsRow:
    label: str
    best: BestTime


class ResultsTable:
    """Immutable, ordered collection of result rows."""

    headers = ("Method", "Best time")

    def __init__(self, rows: Iterable[ResultsRow] = ()) -> None:
        self._rows: tuple[ResultsRow, ...] = tuple(rows)

    @classmethod
    def build(cls, rows: Iterable[tuple[str, float | BestTime | BenchmarkResult | None]]) -> ResultsTable:
        """Build a table from ``(label, best)`` pairs in insertion order."""
        return cls(ResultsRow(label, best_time(best)) for label, best in rows)

    @classmethod
    def from_benchmarks(
        cls,
        labels: Iterable[str],
        results: dict[str, BenchmarkResult | None],
    ) -> ResultsTable:
        """One row per label; labels without a result are absent."""
        return cls.build((label, results.get(label)) for label in labels)

    @property
    def rows(self) -> tuple[ResultsRow, ...]:
        return self._rows

    @property
    def labels(self) -> list[str]:
        return [r.label for r in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[ResultsRow]:
        return iter(self._rows)

    def __getitem__(self, label: str) -> BestTime:
        for r in self._rows:
            if r.label == label:
                return r.best
        raise KeyError(label)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultsTable):
            return NotImplemented
        return self._rows == other._rows

    def head(self, n: int) -> ResultsTable:
        return ResultsTable(self._rows[:n])

    def sort_by_best(self) -> ResultsTable:
        """New table sorted ascending by best time, absent rows last (stable)."""
        return ResultsTable(sorted(self._rows, key=lambda r: r.best.sort_key()))

    def render(self, tablefmt: str = "github") -> str:
        body = [(r.label, str(r.best)) for r in self._rows]
        return tabulate(body, headers=self.headers, tablefmt=tablefmt, colalign=("left", "right"))

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ResultsTable({len(self._rows)} rows)"
