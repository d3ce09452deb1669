"""Pydantic node models for trained decision trees."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from decisions.question import Question

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class Leaf(BaseModel):
    """A terminal node holding the label histogram of its training rows.

    Attributes:
        node_type (Literal["leaf"]): Discriminator field; always `"leaf"`.
        predictions (dict[str, int]): Mapping of class label to the number of
            training rows with that label that reached this leaf. Never empty;
            the counts sum to the number of rows that reached the leaf.

    Examples:
        >>> leaf = Leaf(predictions={"Died": 3, "Lived": 1})
        >>> leaf.prediction
        'Died'
    """

    model_config = ConfigDict(frozen=True)

    node_type: Literal["leaf"] = Field(default="leaf", repr=False)
    predictions: dict[str, int] = Field(
        description="Mapping of class label to the number of training rows with that label at this leaf.",
    )

    @field_validator("predictions", mode="after")
    @classmethod
    def _validate_predictions(cls, value: dict[str, int]) -> dict[str, int]:
        """Validate that the histogram is non-empty with positive counts.

        Args:
            value (dict[str, int]): The histogram to validate.

        Returns:
            dict[str, int]: The validated histogram, unchanged.

        Raises:
            ValueError: If the histogram is empty or holds a count below 1.
        """
        if not value:
            raise ValueError("a leaf must hold at least one label")
        non_positive = sorted(label for label, count in value.items() if count < 1)
        if non_positive:
            raise ValueError(f"label counts must be at least 1, got non-positive counts for {non_positive}")
        return value

    @property
    def prediction(self) -> str:
        """The most frequent label; ties go to the lexicographically smallest label."""
        label, _ = min(self.predictions.items(), key=lambda item: (-item[1], item[0]))
        return label

    @property
    def samples(self) -> int:
        """Number of training rows that reached this leaf."""
        return sum(self.predictions.values())

    @property
    def confidence(self) -> float:
        """Fraction of this leaf's training rows carrying the predicted label."""
        return self.predictions[self.prediction] / self.samples


class Decision(BaseModel):
    """An internal node that routes rows by a question.

    Rows answering "yes" continue into `true_branch`, the rest into
    `false_branch`. Both branches were grown from at least one row each.

    Attributes:
        node_type (Literal["decision"]): Discriminator field; always `"decision"`.
        question (Question): The split tested at this node.
        true_branch (Node): Subtree for rows matching the question.
        false_branch (Node): Subtree for rows not matching the question.
    """

    model_config = ConfigDict(frozen=True)

    node_type: Literal["decision"] = Field(default="decision", repr=False)
    question: Question = Field(description="The split tested at this node.")
    true_branch: Node = Field(description="Subtree for rows matching the question.")
    false_branch: Node = Field(description="Subtree for rows not matching the question.")


type Node = Annotated[Leaf | Decision, Field(discriminator="node_type")]

Decision.model_rebuild()

# ---------------------------------------------------------------------------
# Public interface -- Tree statistics
# ---------------------------------------------------------------------------


def iter_nodes(tree: Node) -> Iterator[tuple[int, Node]]:
    """Yield every node with its level, root first, without recursion.

    Args:
        tree (Node): Root of the tree to walk.

    Yields:
        tuple[int, Node]: `(level, node)` pairs; the root is at level 1.
    """
    pending: list[tuple[int, Node]] = [(1, tree)]
    while pending:
        level, node = pending.pop()
        yield level, node
        if isinstance(node, Decision):
            pending.append((level + 1, node.false_branch))
            pending.append((level + 1, node.true_branch))


def tree_depth(tree: Node) -> int:
    """Return the number of node levels in a tree.

    A single leaf has depth 1, so a tree built with `max_depth=d` always has
    `tree_depth(tree) <= d`.

    Args:
        tree (Node): Root of the tree.

    Returns:
        int: Number of levels from the root to the deepest leaf, inclusive.
    """
    return max(level for level, _ in iter_nodes(tree))


def leaf_count(tree: Node) -> int:
    """Return the number of leaves in a tree.

    Args:
        tree (Node): Root of the tree.

    Returns:
        int: Number of `Leaf` nodes.
    """
    return sum(1 for _, node in iter_nodes(tree) if isinstance(node, Leaf))
