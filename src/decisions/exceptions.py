"""Custom exceptions for the decision tree engine.

Every failure in this package is a logic or input-contract violation rather
than a transient condition, so nothing here is retried. Each exception
subclasses the closest builtin so callers can catch either the precise type or
the builtin family:

Tree building and inference:
- SchemaMismatchError (TypeError): A question was asked of a row whose column
  value is a different variant than the question's threshold.
- EmptyInputError (ValueError): Impurity, split search, or tree building was
  requested for zero rows.
- InvalidDepthError (ValueError): A maximum depth below one was requested.

Validation and scoring:
- InvalidFoldCountError (ValueError): Cross-validation was asked for fewer
  than two folds or more folds than rows.
- LabelNotFoundError (KeyError): A label could not be found, either in an
  external ground-truth mapping or on an unlabeled row.

Data loading:
- ColumnsNotFoundError (ValueError): A CSV file lacks required columns.
"""

from __future__ import annotations


class SchemaMismatchError(TypeError):
    """Raised when a question threshold and a row value are different variants.

    Thresholds are always drawn from the observed values of the same column,
    so this indicates an inconsistent dataset or builder and is never coerced.

    Attributes:
        field_name (str): Name of the column the question tests.
        column_index (int): Index of the column the question tests.
        threshold_kind (str): Variant of the question's threshold, e.g. `"int"`.
        value_kind (str): Variant of the row's value, e.g. `"text"`.

    Examples:
        >>> err = SchemaMismatchError(
        ...     field_name="Age",
        ...     column_index=2,
        ...     threshold_kind="float",
        ...     value_kind="text",
        ... )
        >>> err.value_kind
        'text'
    """

    field_name: str
    column_index: int
    threshold_kind: str
    value_kind: str

    def __init__(
        self,
        *,
        field_name: str,
        column_index: int,
        threshold_kind: str,
        value_kind: str,
    ) -> None:
        """Initialize SchemaMismatchError.

        Args:
            field_name (str): Name of the column the question tests.
            column_index (int): Index of the column the question tests.
            threshold_kind (str): Variant of the question's threshold.
            value_kind (str): Variant of the row's value.
        """
        super().__init__(
            f"Column {field_name!r} (index {column_index}) holds a {value_kind!r} value"
            f" but the question threshold is {threshold_kind!r}"
        )
        self.field_name = field_name
        self.column_index = column_index
        self.threshold_kind = threshold_kind
        self.value_kind = value_kind

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including every attribute.
        """
        return (
            f"{self.__class__.__name__}("
            f"field_name={self.field_name!r}, column_index={self.column_index!r}, "
            f"threshold_kind={self.threshold_kind!r}, value_kind={self.value_kind!r})"
        )


class EmptyInputError(ValueError):
    """Raised when an operation that needs at least one row receives none.

    Attributes:
        operation (str): Name of the operation that received no rows.

    Examples:
        >>> err = EmptyInputError(operation="gini")
        >>> str(err)
        'gini requires at least one row'
    """

    operation: str

    def __init__(self, operation: str) -> None:
        """Initialize EmptyInputError.

        Args:
            operation (str): Name of the operation that received no rows.
        """
        super().__init__(f"{operation} requires at least one row")
        self.operation = operation


class InvalidDepthError(ValueError):
    """Raised when a maximum tree depth below one is requested.

    Attributes:
        max_depth (int): The rejected depth.
    """

    max_depth: int

    def __init__(self, max_depth: int) -> None:
        """Initialize InvalidDepthError.

        Args:
            max_depth (int): The rejected depth.
        """
        super().__init__(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth


class InvalidFoldCountError(ValueError):
    """Raised when cross-validation cannot produce non-empty folds.

    A valid fold count is at least two and at most the number of rows, which
    guarantees that every test fold and every training set is non-empty.

    Attributes:
        folds (int): The rejected fold count.
        row_count (int): Number of rows that were to be folded.

    Examples:
        >>> err = InvalidFoldCountError(folds=10, row_count=4)
        >>> err.row_count
        4
    """

    folds: int
    row_count: int

    def __init__(self, *, folds: int, row_count: int) -> None:
        """Initialize InvalidFoldCountError.

        Args:
            folds (int): The rejected fold count.
            row_count (int): Number of rows that were to be folded.
        """
        super().__init__(f"folds must be between 2 and the row count ({row_count}), got {folds}")
        self.folds = folds
        self.row_count = row_count

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including fold and row counts.
        """
        return f"{self.__class__.__name__}(folds={self.folds!r}, row_count={self.row_count!r})"


class LabelNotFoundError(KeyError):
    """Raised when the label for a row id cannot be found.

    Used both when an external ground-truth mapping has no entry for a row and
    when an unlabeled row (e.g. a Titanic test row) is asked for its label.

    Attributes:
        row_id (int): Identifier of the row whose label is missing.
    """

    row_id: int

    def __init__(self, row_id: int) -> None:
        """Initialize LabelNotFoundError.

        Args:
            row_id (int): Identifier of the row whose label is missing.
        """
        super().__init__(row_id)
        self.row_id = row_id

    def __str__(self) -> str:
        """Return a readable message instead of KeyError's quoted repr.

        Returns:
            str: Message naming the row id.
        """
        return f"No label found for row {self.row_id}"


class ColumnsNotFoundError(ValueError):
    """Raised when requested columns do not exist in a loaded CSV file.

    Attributes:
        missing_columns (list[str]): Column names that were not found.
        available_columns (list[str]): Column names present in the file.

    Examples:
        >>> err = ColumnsNotFoundError(
        ...     missing_columns=["Pclass", "Sex"],
        ...     available_columns=["PassengerId", "Age"],
        ... )
        >>> err.missing_columns
        ['Pclass', 'Sex']
    """

    missing_columns: list[str]
    available_columns: list[str]

    def __init__(
        self,
        missing_columns: list[str],
        available_columns: list[str],
    ) -> None:
        """Initialize ColumnsNotFoundError.

        Args:
            missing_columns (list[str]): Column names not found in the file.
            available_columns (list[str]): Column names present in the file.
        """
        super().__init__(f"Columns not found in CSV file: {sorted(missing_columns)}")
        self.missing_columns = missing_columns
        self.available_columns = available_columns
