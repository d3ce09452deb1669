"""A five-row toy dataset of fruit, handy for examples and tests."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict

from decisions.row import Col, Integer, Text

FRUIT_COLUMNS: Final[tuple[str, ...]] = ("Colour", "Diameter")


class FruitRow(BaseModel):
    """One piece of fruit: its colour, diameter and name.

    Attributes:
        fruit_id (int): Row identifier.
        colour (str): Colour of the fruit (column 0, text).
        diameter (int): Diameter of the fruit (column 1, integer).
        fruit (str): Name of the fruit; the row's label.

    Examples:
        >>> row = FruitRow.new(1, "Red", 3, "Apple")
        >>> row.value(0), row.label()
        (Text(value='Red'), 'Apple')
    """

    model_config = ConfigDict(frozen=True)

    fruit_id: int
    colour: str
    diameter: int
    fruit: str

    @classmethod
    def new(cls, fruit_id: int, colour: str, diameter: int, fruit: str) -> FruitRow:
        """Build a row from positional values.

        Args:
            fruit_id (int): Row identifier.
            colour (str): Colour of the fruit.
            diameter (int): Diameter of the fruit.
            fruit (str): Name of the fruit.

        Returns:
            FruitRow: The new row.
        """
        return cls(fruit_id=fruit_id, colour=colour, diameter=diameter, fruit=fruit)

    def id(self) -> int:
        return self.fruit_id

    def column_name(self, index: int) -> str:
        return FRUIT_COLUMNS[index]

    def value(self, index: int) -> Col:
        match index:
            case 0:
                return Text(self.colour)
            case 1:
                return Integer(self.diameter)
            case _:
                raise IndexError(f"FruitRow has no column {index}")

    def label(self) -> str:
        return self.fruit

    def column_count(self) -> int:
        return len(FRUIT_COLUMNS)


def training_data() -> list[FruitRow]:
    """Return the five-row fruit training set.

    Returns:
        list[FruitRow]: Two apples, two grapes and a lemon.
    """
    return [
        FruitRow.new(1, "Green", 3, "Apple"),
        FruitRow.new(2, "Yellow", 3, "Apple"),
        FruitRow.new(3, "Red", 1, "Grape"),
        FruitRow.new(4, "Red", 1, "Grape"),
        FruitRow.new(5, "Yellow", 3, "Lemon"),
    ]
