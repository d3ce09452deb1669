"""Demonstrates how to enable and configure logging in decisions.

decisions logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, decisions logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``TRAINING`` level
  (numeric value 25, between INFO and WARNING) reports trees built, depths swept
  and test scores, and is the default. ``DEBUG`` also shows every split and
  per-fold accuracy.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Automatic cleanup: logging is re-disabled when the context manager exits.
"""

from decisions import build_tree, classify, enable_logging, sweep_depths
from decisions.datasets import FruitRow, training_data
from decisions.export import to_dot

rows = training_data() * 2

with enable_logging(level="DEBUG", log_format="full"):
    # Pick a depth by cross-validation, then train on every row
    result = sweep_depths(rows, range(1, 5), folds=5)
    tree = build_tree(rows, result.best_depth)

    print(f"\nBest depth: {result.best_depth} ({result.best_score:.2f})")
    print(f"A small red fruit is a {classify(FruitRow.new(99, 'Red', 1, ''), tree)}\n")

# Logging automatically disabled here
print(to_dot(tree))
