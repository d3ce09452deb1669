"""Tests for classify, classify_all and find_leaf."""

from __future__ import annotations

from pytest_check import check

from decisions.datasets.fruit import FruitRow, training_data
from decisions.question import Question
from decisions.row import Integer, Text
from decisions.tree.fitting import build_tree
from decisions.tree.inference import classify, classify_all, find_leaf
from decisions.tree.models import Decision, Leaf


class TestClassify:
    """Tests for walking rows through a tree."""

    def test_routes_by_question(self) -> None:
        """Rows follow the yes branch when they match and the no branch otherwise."""
        # Arrange
        tree = Decision(
            question=Question(field_name="Colour", column_index=0, threshold=Text("Red")),
            true_branch=Leaf(predictions={"Grape": 2}),
            false_branch=Decision(
                question=Question(field_name="Diameter", column_index=1, threshold=Integer(3)),
                true_branch=Leaf(predictions={"Lemon": 1}),
                false_branch=Leaf(predictions={"Apple": 4}),
            ),
        )

        # Act / Assert
        with check:
            assert classify(FruitRow.new(1, "Red", 9, "?"), tree) == "Grape"
        with check:
            assert classify(FruitRow.new(2, "Yellow", 3, "?"), tree) == "Lemon"
        with check:
            assert classify(FruitRow.new(3, "Green", 1, "?"), tree) == "Apple"

    def test_leaf_tree_predicts_majority_for_any_row(self) -> None:
        """A single-leaf tree answers its majority label for every row."""
        # Arrange
        tree = Leaf(predictions={"Apple": 2, "Grape": 2, "Lemon": 1})

        # Act
        predictions = classify_all(training_data(), tree)

        # Assert
        assert predictions == ["Apple"] * 5

    def test_tied_leaf_prediction_is_deterministic(self) -> None:
        """The apple/lemon leaf of the fruit tree predicts Apple."""
        # Arrange
        tree = build_tree(training_data())
        lemon = training_data()[4]

        # Act
        leaf = find_leaf(lemon, tree)

        # Assert
        with check:
            assert leaf.predictions == {"Apple": 1, "Lemon": 1}
        with check:
            assert classify(lemon, tree) == "Apple"

    def test_classify_does_not_read_row_label(self) -> None:
        """Unlabeled rows classify fine."""
        # Arrange
        tree = build_tree(training_data())

        # Act / Assert
        assert classify(FruitRow.new(9, "Red", 1, ""), tree) == "Grape"

    def test_classify_all_preserves_order(self) -> None:
        """One prediction per row, in input order."""
        # Arrange
        rows = training_data()
        tree = build_tree(rows)

        # Act
        predictions = classify_all(rows, tree)

        # Assert
        assert predictions == ["Apple", "Apple", "Grape", "Grape", "Apple"]
