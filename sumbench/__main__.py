"""Run the sum benchmark walkthrough: python -m sumbench"""

from __future__ import annotations

import argparse
import logging
import sys

from sumbench.core.data import DEFAULT_SIZE
from sumbench.core.runner import DEFAULT_MAX_SAMPLES, DEFAULT_SECONDS
from sumbench.session import SessionConfig, run_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sumbench",
        description="Compare how fast different implementations sum the same array.",
    )
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="Array length")
    parser.add_argument("--seconds", type=float, default=DEFAULT_SECONDS,
                        help="Sampling budget per variant, in seconds")
    parser.add_argument("--max-samples", type=int, default=DEFAULT_MAX_SAMPLES,
                        help="Maximum timed trials per variant")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--no-native", action="store_true", help="Skip compiling the C variant")
    parser.add_argument("--cc", default=None, help="C compiler (default: $CC, then gcc/cc/clang)")
    parser.add_argument("--format", default="github", help="tabulate table format")
    parser.add_argument("--chart", default=None, help="Write a bar chart of the results to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.size < 0:
        parser.error("--size must be non-negative")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = SessionConfig(
        size=args.size,
        seconds=args.seconds,
        max_samples=args.max_samples,
        seed=args.seed,
        native=not args.no_native,
        compiler=args.cc,
        tablefmt=args.format,
    )
    report = run_session(config)

    if args.chart:
        from sumbench.charts import plot_results
        print(f"\nchart written to {plot_results(report.sorted_table, args.chart)}")

    return 1 if report.failures else 0


if __name__ == "__main__":
    sys.exit(main())
