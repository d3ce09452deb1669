"""Classification of rows with a trained tree."""

from __future__ import annotations

from collections.abc import Iterable

from decisions.row import DataRow
from decisions.tree.models import Decision, Leaf, Node


def find_leaf(row: DataRow, tree: Node) -> Leaf:
    """Walk a row from the root down to the leaf it lands in.

    Args:
        row (DataRow): The row to route.
        tree (Node): Root of a trained tree.

    Returns:
        Leaf: The leaf reached by following the row's answers.
    """
    node = tree
    while isinstance(node, Decision):
        node = node.true_branch if node.question.matches(row) else node.false_branch
    return node


def classify(row: DataRow, tree: Node) -> str:
    """Predict the label of a row.

    Args:
        row (DataRow): The row to classify. Its label is not read.
        tree (Node): Root of a trained tree.

    Returns:
        str: The majority label of the leaf the row reaches; ties go to the
            lexicographically smallest label.
    """
    return find_leaf(row, tree).prediction


def classify_all(rows: Iterable[DataRow], tree: Node) -> list[str]:
    """Predict the label of every row, in input order.

    Args:
        rows (Iterable[DataRow]): Rows to classify.
        tree (Node): Root of a trained tree.

    Returns:
        list[str]: One predicted label per row.
    """
    return [classify(row, tree) for row in rows]
