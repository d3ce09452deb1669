"""The split predicate tested at every decision node."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from decisions.exceptions import SchemaMismatchError
from decisions.row import Absent, Col, DataRow, Float, Integer, Text


class Question(BaseModel):
    """An atomic yes/no test of one column against a threshold.

    The test depends on the threshold's variant: text thresholds match by
    equality, integer and float thresholds match when the row's value is
    greater than or equal to the threshold. An absent value on either side
    never matches.

    Attributes:
        field_name (str): Display name of the tested column, e.g. `"Sex"`.
        column_index (int): Index of the tested column within the row.
        threshold (Col): Category or lower bound the row value is tested
            against. Always one of the values observed in that column.

    Examples:
        >>> q = Question(field_name="Colour", column_index=0, threshold=Text("Red"))
        >>> str(q)
        'Is Colour == Red'
    """

    model_config = ConfigDict(frozen=True)

    field_name: str = Field(description="Display name of the tested column.")
    column_index: int = Field(ge=0, description="Index of the tested column within the row.")
    threshold: Col = Field(description="Category or lower bound the row value is tested against.")

    def matches(self, row: DataRow) -> bool:
        """Evaluate this question against a row.

        Args:
            row (DataRow): The row to test.

        Returns:
            bool: `True` when the row answers "yes".

        Raises:
            SchemaMismatchError: If the row's value and the threshold are
                different variants (and neither is absent).
        """
        value = row.value(self.column_index)
        match value, self.threshold:
            case (Absent(), _) | (_, Absent()):
                return False
            case Text(value=theirs), Text(value=ours):
                return theirs == ours
            case (Integer(value=theirs), Integer(value=ours)) | (Float(value=theirs), Float(value=ours)):
                return theirs >= ours
            case _:
                raise SchemaMismatchError(
                    field_name=self.field_name,
                    column_index=self.column_index,
                    threshold_kind=self.threshold.kind,
                    value_kind=value.kind,
                )

    def __str__(self) -> str:
        """Return the question as a sentence.

        Returns:
            str: `"Is <field> <op> <value>"`, e.g. `"Is Age >= 22.0"` or
                `"Is Cabin is null"`.
        """
        match self.threshold:
            case Absent():
                condition = "is"
            case Text():
                condition = "=="
            case _:
                condition = ">="
        return f"Is {self.field_name} {condition} {self.threshold}"
