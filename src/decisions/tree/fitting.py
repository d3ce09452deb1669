"""Gini impurity, split search, and depth-bounded tree construction."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from loguru import logger

from decisions.exceptions import EmptyInputError, InvalidDepthError
from decisions.logging import TRAINING_LEVEL
from decisions.question import Question
from decisions.row import Absent, Col, DataRow
from decisions.tree.models import Decision, Leaf, Node, leaf_count, tree_depth


class BestSplit(NamedTuple):
    """Outcome of a split search.

    Attributes:
        gain (float): Information gain of the winning question; `0.0` when no
            question improves on the unsplit rows.
        question (Question | None): The winning question, or `None` when no
            split is worth making.
    """

    gain: float
    question: Question | None


# ---------------------------------------------------------------------------
# Public interface -- Impurity
# ---------------------------------------------------------------------------


def class_counts(rows: Iterable[DataRow]) -> dict[str, int]:
    """Count how many rows carry each label.

    Args:
        rows (Iterable[DataRow]): Rows to count. May be empty.

    Returns:
        dict[str, int]: Mapping of label to occurrence count, in order of
            first appearance.

    Examples:
        >>> class_counts(training_data())  # doctest: +SKIP
        {'Apple': 2, 'Grape': 2, 'Lemon': 1}
    """
    return dict(Counter(row.label() for row in rows))


def gini(rows: Sequence[DataRow]) -> float:
    """Compute the Gini impurity of a set of rows.

    The impurity is the chance that two rows drawn at random carry different
    labels: `0.0` for a pure set, approaching `1.0` as labels mix.

    Args:
        rows (Sequence[DataRow]): Rows to measure.

    Returns:
        float: `1 - sum(p_label ** 2)` over the labels present.

    Raises:
        EmptyInputError: If `rows` is empty.
    """
    if not rows:
        raise EmptyInputError("gini")
    total = len(rows)
    return 1.0 - sum((count / total) ** 2 for count in class_counts(rows).values())


def info_gain(true_rows: Sequence[DataRow], false_rows: Sequence[DataRow], current_impurity: float) -> float:
    """Compute the impurity removed by splitting rows into two partitions.

    Args:
        true_rows (Sequence[DataRow]): Non-empty partition answering "yes".
        false_rows (Sequence[DataRow]): Non-empty partition answering "no".
        current_impurity (float): Gini impurity of the unsplit rows.

    Returns:
        float: `current_impurity` minus the size-weighted impurity of both
            partitions.
    """
    p = len(true_rows) / (len(true_rows) + len(false_rows))
    return current_impurity - p * gini(true_rows) - (1.0 - p) * gini(false_rows)


# ---------------------------------------------------------------------------
# Public interface -- Split search
# ---------------------------------------------------------------------------


def distinct_values(rows: Iterable[DataRow], column_index: int) -> list[Col]:
    """Return the sorted, deduplicated values observed in one column.

    These are the only thresholds considered for a split; no midpoints are
    synthesized. A column with missing cells yields a single `Absent` value,
    sorted ahead of the present values.

    Args:
        rows (Iterable[DataRow]): Rows to read.
        column_index (int): Column to collect.

    Returns:
        list[Col]: Distinct column values in ascending order.
    """
    unique = dict.fromkeys(row.value(column_index) for row in rows)
    return sorted(unique, key=lambda value: (not isinstance(value, Absent), value))


def partition[R: DataRow](rows: Iterable[R], question: Question) -> tuple[list[R], list[R]]:
    """Split rows by whether they match a question, keeping their order.

    Args:
        rows (Iterable[R]): Rows to split.
        question (Question): The question to ask of each row.

    Returns:
        tuple[list[R], list[R]]: `(true_rows, false_rows)`; every input row
            lands in exactly one of them.
    """
    true_rows: list[R] = []
    false_rows: list[R] = []
    for row in rows:
        (true_rows if question.matches(row) else false_rows).append(row)
    return true_rows, false_rows


def find_best_split(rows: Sequence[DataRow]) -> BestSplit:
    """Find the question with the highest information gain.

    Candidates are visited column by column, and within a column in ascending
    value order. A candidate must beat the best gain so far strictly, so ties
    keep the earliest candidate. Questions that leave either side empty are
    skipped.

    Args:
        rows (Sequence[DataRow]): Rows to split. All rows must share a schema.

    Returns:
        BestSplit: The winning gain and question, or `(0.0, None)` when no
            question reduces the impurity.

    Raises:
        EmptyInputError: If `rows` is empty.
    """
    if not rows:
        raise EmptyInputError("find_best_split")
    current_impurity = gini(rows)
    first_row = rows[0]
    best = BestSplit(0.0, None)

    for column_index in range(first_row.column_count()):
        field_name = first_row.column_name(column_index)
        for threshold in distinct_values(rows, column_index):
            question = Question(field_name=field_name, column_index=column_index, threshold=threshold)
            true_rows, false_rows = partition(rows, question)
            if not true_rows or not false_rows:
                continue
            gain = info_gain(true_rows, false_rows, current_impurity)
            if gain > best.gain:
                best = BestSplit(gain, question)
    return best


# ---------------------------------------------------------------------------
# Public interface -- Tree construction
# ---------------------------------------------------------------------------


def build_tree[R: DataRow](rows: Sequence[R], max_depth: int | None = None) -> Node:
    """Grow a decision tree from labeled rows.

    Each node spends one unit of the depth budget, so `max_depth` counts node
    levels including the leaves: `max_depth=1` yields a single leaf and
    `max_depth=2` allows one split. A node also becomes a leaf when no
    question has positive information gain.

    The tree is grown with an explicit work stack rather than recursion, so an
    unbounded build over a large dataset cannot exhaust the interpreter stack.

    Args:
        rows (Sequence[R]): Training rows. Must not be empty.
        max_depth (int | None): Maximum number of node levels, or `None` to
            grow until every leaf is pure or unsplittable.

    Returns:
        Node: Root of the trained tree.

    Raises:
        EmptyInputError: If `rows` is empty.
        InvalidDepthError: If `max_depth` is below 1.
    """
    if not rows:
        raise EmptyInputError("build_tree")
    if max_depth is not None and max_depth < 1:
        raise InvalidDepthError(max_depth)

    # Pre-order plan: each question is followed by its true subtree, then its false subtree.
    plan: list[Leaf | Question] = []
    pending: list[tuple[Sequence[R], int | None]] = [(rows, max_depth)]
    while pending:
        subset, budget = pending.pop()
        remaining = None if budget is None else budget - 1
        if remaining == 0:
            plan.append(Leaf(predictions=class_counts(subset)))
            continue
        gain, question = find_best_split(subset)
        if question is None:
            plan.append(Leaf(predictions=class_counts(subset)))
            continue
        true_rows, false_rows = partition(subset, question)
        logger.debug(
            "Split {} rows on '{}' (gain={:.4f}): {} yes, {} no",
            len(subset),
            question,
            gain,
            len(true_rows),
            len(false_rows),
        )
        plan.append(question)
        pending.append((false_rows, remaining))
        pending.append((true_rows, remaining))

    tree = _assemble(plan)
    logger.opt(lazy=True).log(
        TRAINING_LEVEL,
        "Built tree from {} rows (max_depth={}): depth={}, leaves={}",
        lambda: len(rows),
        lambda: max_depth,
        lambda: tree_depth(tree),
        lambda: leaf_count(tree),
    )
    return tree


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _assemble(plan: list[Leaf | Question]) -> Node:
    """Turn a pre-order plan into a tree, bottom-up.

    Args:
        plan (list[Leaf | Question]): Leaves and questions in pre-order, each
            question followed by its true subtree and then its false subtree.

    Returns:
        Node: Root of the assembled tree.
    """
    built: list[Node] = []
    for step in reversed(plan):
        if isinstance(step, Leaf):
            built.append(step)
            continue
        true_branch = built.pop()
        false_branch = built.pop()
        built.append(Decision(question=step, true_branch=true_branch, false_branch=false_branch))
    return built.pop()
