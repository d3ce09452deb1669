"""Column values and the row contract every dataset must satisfy.

A `Col` is one cell of a row: absent, text, a 64-bit integer or a float. The
four variants are frozen pydantic models discriminated by their `kind` field,
so they are immutable, hashable and compare structurally.
"""

from __future__ import annotations

import math
from typing import Annotated, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

_INT64_MIN: int = -(2**63)
_INT64_MAX: int = 2**63 - 1

# ---------------------------------------------------------------------------
# Public models -- Column values
# ---------------------------------------------------------------------------


class _ColBase(BaseModel):
    """Shared ordering for the column value variants.

    Values of the same variant order by their payload. Values of different
    variants, and two `Absent` values, order as equal: the ordering exists for
    sorting and deduplicating one column, whose values always share a variant.
    """

    model_config = ConfigDict(frozen=True)

    def compare(self, other: Col) -> int:
        """Three-way compare against another column value.

        Args:
            other (Col): The value to compare against.

        Returns:
            int: -1, 0 or 1. Always 0 across variants and for `Absent`.

        Examples:
            >>> Integer(1).compare(Integer(3))
            -1
            >>> Text("a").compare(Integer(3))
            0
        """
        match self, other:
            case (
                (Text(value=mine), Text(value=theirs))
                | (Integer(value=mine), Integer(value=theirs))
                | (Float(value=mine), Float(value=theirs))
            ):
                return (mine > theirs) - (mine < theirs)
            case _:
                return 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, _ColBase):
            return NotImplemented
        return self.compare(other) < 0  # type: ignore[arg-type]

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, _ColBase):
            return NotImplemented
        return self.compare(other) > 0  # type: ignore[arg-type]


class Absent(_ColBase):
    """A missing cell. Absent values never satisfy a question."""

    kind: Literal["absent"] = Field(default="absent", repr=False)

    def __str__(self) -> str:
        return "null"


class Text(_ColBase):
    """A categorical text cell, split on by equality.

    Examples:
        >>> Text("Red")
        Text(value='Red')
    """

    kind: Literal["text"] = Field(default="text", repr=False)
    value: str = Field(strict=True)

    def __init__(self, value: str, /, **data: object) -> None:
        super().__init__(value=value, **data)

    def __str__(self) -> str:
        return self.value


class Integer(_ColBase):
    """A 64-bit signed integer cell, split on by `>=`."""

    kind: Literal["int"] = Field(default="int", repr=False)
    value: int = Field(strict=True, ge=_INT64_MIN, le=_INT64_MAX)

    def __init__(self, value: int, /, **data: object) -> None:
        super().__init__(value=value, **data)

    def __str__(self) -> str:
        return str(self.value)


class Float(_ColBase):
    """A 64-bit floating point cell, split on by `>=`.

    NaN is rejected: use `Absent` (or `to_col`, which maps NaN to `Absent`)
    for cells with no meaningful value.
    """

    kind: Literal["float"] = Field(default="float", repr=False)
    value: float = Field(strict=True)

    def __init__(self, value: float, /, **data: object) -> None:
        super().__init__(value=value, **data)

    @field_validator("value", mode="after")
    @classmethod
    def _reject_nan(cls, value: float) -> float:
        """Reject NaN, which has no place in a total order.

        Args:
            value (float): The candidate payload.

        Returns:
            float: The payload, unchanged.

        Raises:
            ValueError: If `value` is NaN.
        """
        if math.isnan(value):
            raise ValueError("Float column values must not be NaN; use Absent instead")
        return value

    def __str__(self) -> str:
        return str(self.value)


# Use this alias when accepting any column value; Pydantic selects the variant from `kind`.
type Col = Annotated[Absent | Text | Integer | Float, Field(discriminator="kind")]


def to_col(value: str | int | float | None) -> Col:
    """Convert a plain Python scalar into a column value.

    Args:
        value (str | int | float | None): The raw cell. `None` and NaN become
            `Absent`; booleans are stored as integers.

    Returns:
        Col: The matching column value variant.

    Raises:
        TypeError: If `value` is not a str, int, float or None.

    Examples:
        >>> to_col(None)
        Absent()
        >>> to_col(22.5)
        Float(value=22.5)
    """
    if value is None:
        return Absent()
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, bool):
        return Integer(int(value))
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, float):
        return Absent() if math.isnan(value) else Float(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to a column value")


# ---------------------------------------------------------------------------
# Public interface -- Row contract
# ---------------------------------------------------------------------------


@runtime_checkable
class DataRow(Protocol):
    """Read-only view of one labeled row of a dataset.

    Any object with these five methods can be used to build, classify and
    validate trees. The tree engine never mutates rows and only holds
    references to them for the duration of a call.
    """

    def id(self) -> int:
        """Return the row's identifier."""
        ...

    def column_name(self, index: int) -> str:
        """Return the display name of the column at `index`."""
        ...

    def value(self, index: int) -> Col:
        """Return the value of the column at `index`."""
        ...

    def label(self) -> str:
        """Return the row's class label."""
        ...

    def column_count(self) -> int:
        """Return the number of feature columns."""
        ...
