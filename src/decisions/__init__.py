"""decisions: Gini decision trees over typed rows, with k-fold cross-validation."""

from loguru import logger

from decisions.logging import PACKAGE_NAME, enable_logging
from decisions.question import Question
from decisions.row import Absent, Col, DataRow, Float, Integer, Text, to_col
from decisions.tree import Decision, Leaf, Node, build_tree, classify
from decisions.validation import cross_validate, score_against, sweep_depths

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the decisions package by default

__all__ = [
    "Absent",
    "Col",
    "DataRow",
    "Decision",
    "Float",
    "Integer",
    "Leaf",
    "Node",
    "Question",
    "Text",
    "build_tree",
    "classify",
    "cross_validate",
    "enable_logging",
    "score_against",
    "sweep_depths",
    "to_col",
]
