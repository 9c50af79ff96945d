"""Tests for sumbench.core.table."""

import math

import pytest

from sumbench.core.runner import BenchmarkResult
from sumbench.core.table import ABSENT, Absent, Present, ResultsRow, ResultsTable, best_time


class TestBestTime:
    def test_present_rejects_nan(self):
        with pytest.raises(ValueError):
            Present(math.nan)

    def test_present_rejects_negative(self):
        with pytest.raises(ValueError):
            Present(-1.0)

    def test_present_before_absent(self):
        assert Present(1e9) < ABSENT
        assert not ABSENT < Present(0.0)
        assert not ABSENT < ABSENT

    def test_sorted_mixed(self):
        assert sorted([ABSENT, Present(2.0), Present(1.0)]) == [Present(1.0), Present(2.0), ABSENT]

    def test_absent_is_singleton_value(self):
        assert Absent() == ABSENT
        assert not ABSENT.is_present

    def test_normalise(self):
        assert best_time(None) is ABSENT
        assert best_time(0.25) == Present(0.25)
        assert best_time(BenchmarkResult(times=(0.3, 0.1))) == Present(0.1)
        assert best_time(ABSENT) is ABSENT

    def test_str(self):
        assert str(Present(0.0125)) == "12.500 ms"
        assert str(ABSENT) == "n/a"


ROWS = [
    ("C", 0.0050),
    ("Python - built-in", 0.5000),
    ("Python - numpy", None),
    ("Python - hand-written", 0.9000),
    ("Numba - built-in", 0.0040),
    ("Numba - hand-written", 0.0050),
    ("Numba - hand-written SIMD", 0.0020),
]


class TestResultsTable:
    def test_insertion_order(self):
        t = ResultsTable.build(ROWS)
        assert t.labels == [label for label, _ in ROWS]
        assert len(t) == 7

    def test_sort_ascending_absent_last(self):
        s = ResultsTable.build(ROWS).sort_by_best()
        bests = [r.best for r in s]
        present = [b.seconds for b in bests if b.is_present]
        assert present == sorted(present)
        assert bests[-1] is ABSENT
        assert s.labels[0] == "Numba - hand-written SIMD"

    def test_sort_is_stable_for_ties(self):
        s = ResultsTable.build(ROWS).sort_by_best()
        assert s.labels.index("C") < s.labels.index("Numba - hand-written")

    def test_sort_does_not_mutate(self):
        t = ResultsTable.build(ROWS)
        t.sort_by_best()
        assert t.labels == [label for label, _ in ROWS]

    def test_all_absent(self):
        t = ResultsTable.build([("a", None), ("b", None)])
        assert t.sort_by_best().labels == ["a", "b"]

    def test_head(self):
        t = ResultsTable.build(ROWS)
        assert t.head(2).labels == ["C", "Python - built-in"]
        assert len(t.head(0)) == 0

    def test_getitem(self):
        t = ResultsTable.build(ROWS)
        assert t["Python - numpy"] is ABSENT
        assert t["C"] == Present(0.005)
        with pytest.raises(KeyError):
            t["Fortran"]

    def test_from_benchmarks(self):
        t = ResultsTable.from_benchmarks(
            ["C", "Python - numpy"],
            {"C": BenchmarkResult(times=(0.2, 0.1))},
        )
        assert t.rows == (ResultsRow("C", Present(0.1)), ResultsRow("Python - numpy", ABSENT))

    def test_render(self):
        text = ResultsTable.build(ROWS).render()
        assert "Method" in text and "Best time" in text
        assert "5.000 ms" in text
        assert "n/a" in text

    def test_render_other_format(self):
        text = ResultsTable.build(ROWS[:1]).render("grid")
        assert "+" in text

    def test_equality(self):
        assert ResultsTable.build(ROWS) == ResultsTable.build(ROWS)
        assert ResultsTable.build(ROWS) != ResultsTable.build(ROWS[:2])
