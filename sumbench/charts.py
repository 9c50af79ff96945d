"""Bar chart of the results table."""

from __future__ import annotations

import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sumbench.core.table import Present, ResultsTable

COLORS = {
    "C": "#888888",
    "Python": "#4A90D9",
    "Numba": "#5CB85C",
}


def _color(label: str) -> str:
    return COLORS.get(label.split(" - ")[0], "#bc8cff")


def plot_results(table: ResultsTable, path: str | os.PathLike) -> str:
    """Write a horizontal bar chart of best times (log scale) to ``path``.

    Absent rows are left out. Returns the path written.
    """
    rows = [r for r in table if isinstance(r.best, Present)]
    labels = [r.label for r in rows]
    times_ms = [r.best.milliseconds for r in rows]

    fig, ax = plt.subplots(figsize=(10, 0.6 * max(len(rows), 1) + 1.5))
    y = list(range(len(rows)))
    if rows:
        ax.barh(y, times_ms, color=[_color(lbl) for lbl in labels])
        ax.set_xscale("log")
    ax.set_yticks(y)
    ax.set_yticklabels(labels)
    ax.invert_yaxis()
    ax.set_xlabel("Best time (ms, log scale)")
    ax.set_title("sum(a): best time per implementation", fontweight="bold")
    ax.grid(True, axis="x", alpha=0.3)
    for yi, t in zip(y, times_ms):
        ax.text(t, yi, f" {t:.2f}", va="center", fontsize=9)

    fig.tight_layout()
    fig.savefig(path, dpi=120)
    plt.close(fig)
    return os.fspath(path)
