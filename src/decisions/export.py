"""Graphviz `.dot` rendering of trained trees."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from decisions.tree.models import Decision, Leaf, Node


class _NodeIds:
    """Hands out node identifiers 1, 2, 3, ... in request order."""

    def __init__(self) -> None:
        self._last = 0

    def next(self) -> int:
        self._last += 1
        return self._last


def to_dot(tree: Node) -> str:
    """Render a tree as a Graphviz digraph.

    Nodes are visited breadth-first, one level at a time, and numbered from 1
    in the order they are discovered. Decision nodes become boxes labeled with
    their question and two edges, `yes` to the true branch and `no` to the
    false branch. Leaves become circles labeled with their label histogram.

    Args:
        tree (Node): Root of the tree to render.

    Returns:
        str: The complete `digraph Tree { ... }` document.

    Examples:
        >>> 'shape=circle,label="{Apple: 2}"' in to_dot(Leaf(predictions={"Apple": 2}))
        True
    """
    ids = _NodeIds()
    nodes: list[str] = []
    edges: list[str] = []

    level: list[tuple[int, Node]] = [(ids.next(), tree)]
    while level:
        next_level: list[tuple[int, Node]] = []
        for node_id, node in level:
            if isinstance(node, Decision):
                nodes.append(f'\t{node_id}[shape=box,label="{_escape(str(node.question))}"];')
                true_id = ids.next()
                false_id = ids.next()
                edges.append(f'\t{node_id}->{true_id}[fontsize=32,label="yes"];')
                edges.append(f'\t{node_id}->{false_id}[fontsize=32,label="no"];')
                next_level.append((true_id, node.true_branch))
                next_level.append((false_id, node.false_branch))
            else:
                nodes.append(f'\t{node_id}[shape=circle,label="{_escape(_histogram(node))}"];')
        level = next_level

    return "\n".join(["digraph Tree {", *nodes, *edges, "}"])


def write_dot(tree: Node, path: str | Path) -> Path:
    """Write a tree's `.dot` rendering to a file.

    Args:
        tree (Node): Root of the tree to render.
        path (str | Path): Destination file; overwritten if it exists.

    Returns:
        Path: The written path.
    """
    destination = Path(path)
    destination.write_text(to_dot(tree), encoding="utf-8")
    logger.info("Wrote tree graph to {}", destination)
    return destination


def _histogram(leaf: Leaf) -> str:
    """Format a leaf's counts as `{label: count, ...}` with labels sorted."""
    return "{" + ", ".join(f"{label}: {count}" for label, count in sorted(leaf.predictions.items())) + "}"


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
