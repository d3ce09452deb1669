"""K-fold cross-validation, depth selection, and scoring against ground truth."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial

import numpy as np
from loguru import logger
from pydantic import BaseModel, Field, model_validator
from sklearn.metrics import accuracy_score

from decisions.exceptions import EmptyInputError, InvalidFoldCountError, LabelNotFoundError
from decisions.logging import TRAINING_LEVEL
from decisions.row import DataRow
from decisions.tree.fitting import build_tree
from decisions.tree.inference import classify_all
from decisions.tree.models import Node

type TrainFn[R: DataRow] = Callable[[list[R]], Node]

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class DepthSweepResult(BaseModel):
    """Cross-validated accuracy for each candidate maximum depth.

    Attributes:
        folds (int): Number of folds used for every candidate.
        scores (dict[int, float]): Mean cross-validated accuracy per depth, in
            the order the depths were given.
        best_depth (int): Depth with the highest score; ties go to the
            smallest depth.
        best_score (float): Score of `best_depth`.

    Examples:
        >>> result = DepthSweepResult(folds=10, scores={1: 0.61, 2: 0.78}, best_depth=2, best_score=0.78)
        >>> result.best_depth
        2
    """

    folds: int = Field(ge=2, description="Number of folds used for every candidate.")
    scores: dict[int, float] = Field(description="Mean cross-validated accuracy per candidate depth.")
    best_depth: int = Field(ge=1, description="Depth with the highest score.")
    best_score: float = Field(ge=0.0, le=1.0, description="Score of the best depth.")

    @model_validator(mode="after")
    def _validate_best_depth_in_scores(self) -> DepthSweepResult:
        """Validate that the best depth is one of the scored depths.

        Returns:
            DepthSweepResult: The validated model instance.

        Raises:
            ValueError: If `best_depth` was not scored or its score disagrees
                with `best_score`.
        """
        if self.best_depth not in self.scores:
            raise ValueError(f"best_depth {self.best_depth} is not among the scored depths {sorted(self.scores)}")
        if self.scores[self.best_depth] != self.best_score:
            raise ValueError("best_score must equal the score recorded for best_depth")
        return self


class ScoreReport(BaseModel):
    """Accuracy of a tree against externally supplied labels.

    Attributes:
        correct (int): Number of rows whose predicted label matched.
        total (int): Number of rows scored.
        accuracy (float): `correct / total`.
    """

    correct: int = Field(ge=0, description="Number of rows whose predicted label matched.")
    total: int = Field(ge=1, description="Number of rows scored.")
    accuracy: float = Field(ge=0.0, le=1.0, description="Fraction of rows predicted correctly.")

    @model_validator(mode="after")
    def _validate_correct_within_total(self) -> ScoreReport:
        """Validate that no more rows are correct than were scored.

        Returns:
            ScoreReport: The validated model instance.

        Raises:
            ValueError: If `correct` exceeds `total`.
        """
        if self.correct > self.total:
            raise ValueError(f"correct ({self.correct}) cannot exceed total ({self.total})")
        return self

    def __str__(self) -> str:
        """Return the report as `"correct/total = pct%"`.

        Returns:
            str: E.g. `"321/418 = 76.79425837320574%"`.
        """
        return f"{self.correct}/{self.total} = {self.accuracy * 100.0}%"


# ---------------------------------------------------------------------------
# Public interface -- Cross-validation
# ---------------------------------------------------------------------------


def fold_dataset[R](rows: Sequence[R], folds: int, current: int) -> tuple[list[R], list[R]]:
    """Split rows into a training set and the `current` test fold.

    Rows are striped across folds by position: the row at index `i` belongs
    to fold `i % folds`. No shuffling happens, so any ordering in the input
    carries into the folds.

    Args:
        rows (Sequence[R]): Rows to split.
        folds (int): Total number of folds.
        current (int): Index of the fold held out for testing.

    Returns:
        tuple[list[R], list[R]]: `(training_rows, test_rows)`, both in input
            order.

    Examples:
        >>> fold_dataset([1, 2, 3, 4, 5, 6], 3, 2)
        ([1, 2, 4, 5], [3, 6])
    """
    training: list[R] = []
    test: list[R] = []
    for index, row in enumerate(rows):
        (test if index % folds == current else training).append(row)
    return training, test


def cross_validate[R: DataRow](rows: Sequence[R], folds: int, train_fn: TrainFn[R]) -> float:
    """Estimate the accuracy of a training procedure with k-fold validation.

    Each fold is held out once while a tree is trained on the remaining rows
    with `train_fn`; the fold's accuracy is the fraction of its rows whose
    predicted label matches their own label.

    Args:
        rows (Sequence[R]): Labeled rows.
        folds (int): Number of folds, between 2 and `len(rows)` inclusive.
        train_fn (TrainFn[R]): Builds a tree from a list of training rows,
            e.g. `partial(build_tree, max_depth=4)`.

    Returns:
        float: Mean of the per-fold accuracies, in `[0, 1]`.

    Raises:
        InvalidFoldCountError: If `folds` is below 2 or above the row count.
    """
    if folds < 2 or folds > len(rows):
        raise InvalidFoldCountError(folds=folds, row_count=len(rows))

    fold_scores: list[float] = []
    for current in range(folds):
        training, test = fold_dataset(rows, folds, current)
        tree = train_fn(training)
        predictions = classify_all(test, tree)
        fold_score = float(accuracy_score([row.label() for row in test], predictions))
        logger.debug("Fold {}/{}: accuracy={:.4f} over {} rows", current + 1, folds, fold_score, len(test))
        fold_scores.append(fold_score)
    return float(np.mean(fold_scores))


def sweep_depths(
    rows: Sequence[DataRow],
    depths: Iterable[int],
    *,
    folds: int,
    max_workers: int | None = None,
) -> DepthSweepResult:
    """Cross-validate a range of maximum depths and pick the best one.

    Each depth is an independent unit of work over the shared, read-only
    rows, so candidates may be evaluated concurrently.

    Args:
        rows (Sequence[DataRow]): Labeled rows.
        depths (Iterable[int]): Candidate `max_depth` values, each at least 1.
        folds (int): Number of folds for every candidate.
        max_workers (int | None): Threads used to evaluate candidates. `None`
            or `1` evaluates them one after another.

    Returns:
        DepthSweepResult: Scores per depth and the winning depth.

    Raises:
        ValueError: If `depths` is empty.
        InvalidFoldCountError: If `folds` is invalid for `rows`.
        InvalidDepthError: If a candidate depth is below 1.
    """
    candidates = list(depths)
    if not candidates:
        raise ValueError("depths must contain at least one candidate")
    if folds < 2 or folds > len(rows):
        raise InvalidFoldCountError(folds=folds, row_count=len(rows))

    def _score(depth: int) -> float:
        return cross_validate(rows, folds, partial(build_tree, max_depth=depth))

    if max_workers is None or max_workers <= 1:
        results = [_score(depth) for depth in candidates]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(_score, candidates))

    scores = dict(zip(candidates, results, strict=True))
    for depth, score in scores.items():
        logger.log(TRAINING_LEVEL, "max_depth={}: cross-validated accuracy={:.4f}", depth, score)
    best_depth = min(scores, key=lambda depth: (-scores[depth], depth))
    return DepthSweepResult(folds=folds, scores=scores, best_depth=best_depth, best_score=scores[best_depth])


# ---------------------------------------------------------------------------
# Public interface -- Scoring against ground truth
# ---------------------------------------------------------------------------


def score_against(rows: Sequence[DataRow], tree: Node, expected: Mapping[int, str]) -> ScoreReport:
    """Score a tree's predictions against labels supplied from elsewhere.

    Use this for unlabeled rows (such as a Titanic test file) whose true
    labels live in a separate id-to-label mapping.

    Args:
        rows (Sequence[DataRow]): Rows to classify; their own labels are not read.
        tree (Node): Root of a trained tree.
        expected (Mapping[int, str]): Ground-truth label for each row id.

    Returns:
        ScoreReport: Count of correct predictions, total rows and accuracy.

    Raises:
        EmptyInputError: If `rows` is empty.
        LabelNotFoundError: If `expected` has no label for one of the rows.
    """
    if not rows:
        raise EmptyInputError("score_against")
    truth: list[str] = []
    for row in rows:
        row_id = row.id()
        if row_id not in expected:
            raise LabelNotFoundError(row_id)
        truth.append(expected[row_id])
    predictions = classify_all(rows, tree)
    correct = int(accuracy_score(truth, predictions, normalize=False))
    report = ScoreReport(correct=correct, total=len(rows), accuracy=correct / len(rows))
    logger.log(TRAINING_LEVEL, "Scored {} rows against ground truth: {}", len(rows), report)
    return report
