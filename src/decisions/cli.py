"""Command line entry point: train on Titanic data, export, and score.

Examples:
    Train an unbounded tree and write its graph::

        decisions --train train.csv --dot tree.dot

    Pick a depth by 10-fold cross-validation, then score on the test file::

        decisions --train train.csv --sweep --test test.csv --check gender_submission.csv
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import get_args

import polars as pl
from pydantic import ValidationError

from decisions.config import DecisionsSettings
from decisions.datasets.titanic import load_check, load_titanic
from decisions.exceptions import (
    ColumnsNotFoundError,
    EmptyInputError,
    InvalidDepthError,
    InvalidFoldCountError,
    LabelNotFoundError,
    SchemaMismatchError,
)
from decisions.export import write_dot
from decisions.logging import LogLevel, enable_logging
from decisions.tree.fitting import build_tree
from decisions.validation import score_against, sweep_depths

_REPORTED_ERRORS: tuple[type[Exception], ...] = (
    ColumnsNotFoundError,
    EmptyInputError,
    InvalidDepthError,
    InvalidFoldCountError,
    LabelNotFoundError,
    SchemaMismatchError,
    ValidationError,
    pl.exceptions.PolarsError,
    OSError,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the `decisions` command.

    Returns:
        argparse.ArgumentParser: The configured parser.
    """
    parser = argparse.ArgumentParser(prog="decisions", description="Nice decision tree")
    parser.add_argument("-t", "--train", required=True, help="Training file")
    parser.add_argument("-s", "--test", help="Testing file")
    parser.add_argument("-c", "--check", help="File to check the test")
    parser.add_argument("-d", "--dot", help="Output dot file")

    depth = parser.add_mutually_exclusive_group()
    depth.add_argument("--depth", type=int, help="Maximum tree depth (default: unbounded)")
    depth.add_argument(
        "--sweep",
        action="store_true",
        help="Choose the maximum depth by cross-validation over the configured depth range",
    )
    parser.add_argument("--folds", type=int, help="Cross-validation folds for --sweep")
    parser.add_argument("--workers", type=int, help="Threads used by --sweep")
    parser.add_argument("--log-level", choices=get_args(LogLevel.__value__), help="Minimum log level to print")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the `decisions` command.

    Args:
        argv (Sequence[str] | None): Arguments excluding the program name;
            `None` reads `sys.argv`.

    Returns:
        int: Process exit status, `0` on success and `1` on a reported error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.test is None) != (args.check is None):
        parser.error("--test and --check must be given together")

    settings = DecisionsSettings()
    level: LogLevel = args.log_level or settings.log_level
    with enable_logging(level=level):
        try:
            _run(args, settings)
        except _REPORTED_ERRORS as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
    return 0


def _run(args: argparse.Namespace, settings: DecisionsSettings) -> None:
    """Train, export and score according to parsed arguments.

    Args:
        args (argparse.Namespace): Parsed command line arguments.
        settings (DecisionsSettings): Defaults for options not given on the
            command line.
    """
    train = load_titanic(args.train)

    max_depth: int | None = args.depth
    if args.sweep:
        result = sweep_depths(
            train,
            settings.depths,
            folds=settings.folds if args.folds is None else args.folds,
            max_workers=settings.max_workers if args.workers is None else args.workers,
        )
        max_depth = result.best_depth
        print(f"Best max depth: {result.best_depth} (cross-validated accuracy {result.best_score:.4f})")

    tree = build_tree(train, max_depth)

    if args.dot:
        write_dot(tree, args.dot)

    if args.test and args.check:
        report = score_against(load_titanic(args.test), tree, load_check(args.check))
        print(report)


if __name__ == "__main__":
    sys.exit(main())
