"""Tests for Question: matching semantics, schema mismatches, and rendering."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from pytest_check import check

from decisions.datasets.fruit import FruitRow
from decisions.datasets.titanic import TitanicRow
from decisions.exceptions import SchemaMismatchError
from decisions.question import Question
from decisions.row import Absent, Col, Float, Integer, Text


class TestQuestionMatches:
    """Tests for `Question.matches` across every variant combination."""

    def test_text_threshold_matches_equal_text(self) -> None:
        """A text question should match rows holding exactly that text."""
        # Arrange
        question = Question(field_name="Colour", column_index=0, threshold=Text("Red"))

        # Act / Assert
        with check:
            assert question.matches(FruitRow.new(1, "Red", 1, "toenails"))
        with check:
            assert not question.matches(FruitRow.new(2, "Green", 1, "spleen"))

    def test_integer_threshold_matches_greater_or_equal(self) -> None:
        """An integer question should match values at or above the threshold."""
        # Arrange
        question = Question(field_name="Diameter", column_index=1, threshold=Integer(42))

        # Act / Assert
        with check:
            assert question.matches(FruitRow.new(1, "Red", 42, "toenails"))
        with check:
            assert question.matches(FruitRow.new(2, "Red", 43, "toenails"))
        with check:
            assert not question.matches(FruitRow.new(3, "Red", 1, "spleen"))

    def test_float_threshold_matches_greater_or_equal(self) -> None:
        """A float question should match values at or above the threshold."""
        # Arrange
        question = Question(field_name="Age", column_index=2, threshold=Float(30.0))

        # Act / Assert
        with check:
            assert question.matches(_passenger(age=30.0))
        with check:
            assert question.matches(_passenger(age=64.5))
        with check:
            assert not question.matches(_passenger(age=29.9))

    def test_absent_row_value_never_matches(self) -> None:
        """A missing cell should answer "no" to any question on its column."""
        # Arrange
        question = Question(field_name="Age", column_index=2, threshold=Float(0.0))

        # Act / Assert
        assert not question.matches(_passenger(age=None))

    def test_absent_threshold_never_matches(self) -> None:
        """A question whose threshold is absent should never match, even absent values."""
        # Arrange
        question = Question(field_name="Age", column_index=2, threshold=Absent())

        # Act / Assert
        with check:
            assert not question.matches(_passenger(age=None))
        with check:
            assert not question.matches(_passenger(age=40.0))

    @pytest.mark.parametrize(
        ("column_index", "threshold"),
        [
            (0, Integer(1)),
            (1, Text("1")),
            (1, Float(1.0)),
        ],
    )
    def test_variant_mismatch_raises_schema_mismatch(self, column_index: int, threshold: Col) -> None:
        """A threshold of a different variant than the row value should fail loudly.

        Args:
            column_index (int): Fruit column to test (0 is text, 1 is integer).
            threshold (Col): A threshold of the wrong variant for that column.
        """
        # Arrange
        question = Question(field_name="x", column_index=column_index, threshold=threshold)

        # Act / Assert
        with pytest.raises(SchemaMismatchError) as exc_info:
            question.matches(FruitRow.new(1, "Red", 1, "Apple"))
        assert exc_info.value.column_index == column_index

    def test_schema_mismatch_is_a_type_error(self) -> None:
        """Callers catching TypeError should also catch schema mismatches."""
        # Arrange
        question = Question(field_name="Colour", column_index=0, threshold=Integer(1))

        # Act / Assert
        with pytest.raises(TypeError):
            question.matches(FruitRow.new(1, "Red", 1, "Apple"))


class TestQuestionModel:
    """Tests for construction and rendering."""

    def test_negative_column_index_rejected(self) -> None:
        """Column indexes start at zero."""
        # Arrange / Act / Assert
        with pytest.raises(ValidationError):
            Question(field_name="x", column_index=-1, threshold=Integer(1))

    def test_threshold_validated_from_dict(self) -> None:
        """A serialized threshold should be rebuilt as the right variant."""
        # Arrange / Act
        question = Question.model_validate(
            {"field_name": "Sex", "column_index": 1, "threshold": {"kind": "text", "value": "male"}}
        )

        # Assert
        assert question.threshold == Text("male")

    @pytest.mark.parametrize(
        ("threshold", "expected"),
        [
            (Text("Red"), "Is Colour == Red"),
            (Integer(3), "Is Colour >= 3"),
            (Float(0.5), "Is Colour >= 0.5"),
            (Absent(), "Is Colour is null"),
        ],
    )
    def test_str_renders_sentence(self, threshold: Col, expected: str) -> None:
        """`str()` should read as a yes/no question using the variant's operator.

        Args:
            threshold (Col): The question's threshold.
            expected (str): The expected rendering.
        """
        # Arrange
        question = Question(field_name="Colour", column_index=0, threshold=threshold)

        # Act / Assert
        assert str(question) == expected


def _passenger(*, age: float | None) -> TitanicRow:
    """Build a Titanic passenger that differs only by age.

    Args:
        age (float | None): Passenger age, or None when unknown.

    Returns:
        TitanicRow: The passenger.
    """
    return TitanicRow(
        passenger_id=1,
        survived=1,
        pclass=3,
        name="Braund, Mr. Owen Harris",
        sex="male",
        age=age,
        sibsp=1,
        parch=0,
        ticket="A/5 21171",
    )
