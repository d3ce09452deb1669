"""Tests for custom exceptions.

This module tests the exception taxonomy of the decision tree engine, ensuring
proper inheritance from builtin families, attribute storage, and readable
messages.
"""

from __future__ import annotations

import pytest
from pytest_check import check

from decisions.exceptions import (
    ColumnsNotFoundError,
    EmptyInputError,
    InvalidDepthError,
    InvalidFoldCountError,
    LabelNotFoundError,
    SchemaMismatchError,
)


class TestSchemaMismatchError:
    """Tests for SchemaMismatchError."""

    def test_is_catchable_as_type_error(self) -> None:
        """A variant mismatch is a type problem and can be caught as TypeError."""
        error = SchemaMismatchError(field_name="Age", column_index=2, threshold_kind="float", value_kind="text")

        with pytest.raises(TypeError):
            raise error

    def test_stores_attributes_and_message(self) -> None:
        """The column and both variants are available for reporting."""
        error = SchemaMismatchError(field_name="Age", column_index=2, threshold_kind="float", value_kind="text")

        with check:
            assert error.field_name == "Age"
        with check:
            assert error.column_index == 2
        with check:
            assert error.threshold_kind == "float"
        with check:
            assert error.value_kind == "text"
        with check:
            assert str(error) == "Column 'Age' (index 2) holds a 'text' value but the question threshold is 'float'"

    def test_repr_includes_every_attribute(self) -> None:
        """The repr carries enough context to debug the mismatch."""
        error = SchemaMismatchError(field_name="Sex", column_index=1, threshold_kind="text", value_kind="int")

        assert repr(error) == (
            "SchemaMismatchError(field_name='Sex', column_index=1, threshold_kind='text', value_kind='int')"
        )


class TestEmptyInputError:
    """Tests for EmptyInputError."""

    def test_is_value_error_naming_operation(self) -> None:
        """The message names the operation that received no rows."""
        error = EmptyInputError("build_tree")

        with check:
            assert isinstance(error, ValueError)
        with check:
            assert error.operation == "build_tree"
        with check:
            assert str(error) == "build_tree requires at least one row"


class TestInvalidDepthError:
    """Tests for InvalidDepthError."""

    def test_is_value_error_with_depth(self) -> None:
        """The rejected depth is stored and reported."""
        error = InvalidDepthError(0)

        with check:
            assert isinstance(error, ValueError)
        with check:
            assert error.max_depth == 0
        with check:
            assert "got 0" in str(error)


class TestInvalidFoldCountError:
    """Tests for InvalidFoldCountError."""

    def test_stores_folds_and_row_count(self) -> None:
        """Both the fold count and the row count are kept for the caller."""
        error = InvalidFoldCountError(folds=10, row_count=4)

        with check:
            assert isinstance(error, ValueError)
        with check:
            assert error.folds == 10
        with check:
            assert error.row_count == 4
        with check:
            assert str(error) == "folds must be between 2 and the row count (4), got 10"
        with check:
            assert repr(error) == "InvalidFoldCountError(folds=10, row_count=4)"


class TestLabelNotFoundError:
    """Tests for LabelNotFoundError."""

    def test_is_catchable_as_key_error(self) -> None:
        """A missing label is a failed lookup."""
        with pytest.raises(KeyError):
            raise LabelNotFoundError(892)

    def test_str_is_readable_rather_than_quoted(self) -> None:
        """KeyError's quoted repr is replaced with a sentence."""
        error = LabelNotFoundError(892)

        with check:
            assert error.row_id == 892
        with check:
            assert str(error) == "No label found for row 892"


class TestColumnsNotFoundError:
    """Tests for ColumnsNotFoundError."""

    def test_stores_missing_and_available_columns(self) -> None:
        """Missing columns are reported sorted; available columns are kept as given."""
        error = ColumnsNotFoundError(
            missing_columns=["Sex", "Pclass"],
            available_columns=["PassengerId", "Age"],
        )

        with check:
            assert isinstance(error, ValueError)
        with check:
            assert error.missing_columns == ["Sex", "Pclass"]
        with check:
            assert error.available_columns == ["PassengerId", "Age"]
        with check:
            assert str(error) == "Columns not found in CSV file: ['Pclass', 'Sex']"
