"""Decision tree sub-package: node models, fitting, and inference."""

from __future__ import annotations

from decisions.tree.fitting import (
    BestSplit,
    build_tree,
    class_counts,
    distinct_values,
    find_best_split,
    gini,
    info_gain,
    partition,
)
from decisions.tree.inference import classify, classify_all, find_leaf
from decisions.tree.models import Decision, Leaf, Node, iter_nodes, leaf_count, tree_depth

__all__ = [
    "BestSplit",
    "Decision",
    "Leaf",
    "Node",
    "build_tree",
    "class_counts",
    "classify",
    "classify_all",
    "distinct_values",
    "find_best_split",
    "find_leaf",
    "gini",
    "info_gain",
    "iter_nodes",
    "leaf_count",
    "partition",
    "tree_depth",
]
