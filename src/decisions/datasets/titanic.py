"""Titanic passenger rows and loaders for the Kaggle CSV files.

Each passenger exposes five feature columns:

| Index | Name     | Variant            |
| ----- | -------- | ------------------ |
| 0     | Class    | Integer            |
| 1     | Sex      | Text               |
| 2     | Age      | Float, or Absent   |
| 3     | Siblings | Integer            |
| 4     | Parch    | Integer            |

and is labeled `"Lived"` or `"Died"` from its `Survived` flag.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

import polars as pl
from loguru import logger
from pydantic import BaseModel, ConfigDict

from decisions.exceptions import ColumnsNotFoundError, LabelNotFoundError
from decisions.row import Absent, Col, Float, Integer, Text

TITANIC_COLUMNS: Final[tuple[str, ...]] = ("Class", "Sex", "Age", "Siblings", "Parch")

LIVED: Final[str] = "Lived"
DIED: Final[str] = "Died"

# CSV column -> dtype for every column the loader reads. Survived is optional.
_PASSENGER_SCHEMA: Final[dict[str, pl.DataType]] = {
    "PassengerId": pl.Int64(),
    "Pclass": pl.Int64(),
    "Name": pl.String(),
    "Sex": pl.String(),
    "Age": pl.Float64(),
    "SibSp": pl.Int64(),
    "Parch": pl.Int64(),
    "Ticket": pl.String(),
}
_CHECK_SCHEMA: Final[dict[str, pl.DataType]] = {
    "PassengerId": pl.Int64(),
    "Survived": pl.Int64(),
}


class TitanicRow(BaseModel):
    """One Titanic passenger.

    Attributes:
        passenger_id (int): Kaggle `PassengerId`.
        survived (int | None): `1` if the passenger survived, `0` if not, and
            `None` for unlabeled (test) passengers.
        pclass (int): Ticket class, 1 to 3.
        name (str): Passenger name.
        sex (str): `"male"` or `"female"`.
        age (float | None): Age in years, `None` when unknown.
        sibsp (int): Number of siblings and spouses aboard.
        parch (int): Number of parents and children aboard.
        ticket (str): Ticket number.
    """

    model_config = ConfigDict(frozen=True)

    passenger_id: int
    survived: int | None = None
    pclass: int
    name: str
    sex: str
    age: float | None = None
    sibsp: int
    parch: int
    ticket: str

    def id(self) -> int:
        return self.passenger_id

    def column_name(self, index: int) -> str:
        return TITANIC_COLUMNS[index]

    def value(self, index: int) -> Col:
        match index:
            case 0:
                return Integer(self.pclass)
            case 1:
                return Text(self.sex)
            case 2:
                return Absent() if self.age is None else Float(self.age)
            case 3:
                return Integer(self.sibsp)
            case 4:
                return Integer(self.parch)
            case _:
                raise IndexError(f"TitanicRow has no column {index}")

    def label(self) -> str:
        """Return `"Lived"` or `"Died"`.

        Raises:
            LabelNotFoundError: If the passenger has no `Survived` value.
        """
        if self.survived is None:
            raise LabelNotFoundError(self.passenger_id)
        return LIVED if self.survived == 1 else DIED

    def column_count(self) -> int:
        return len(TITANIC_COLUMNS)


def load_titanic(path: str | Path) -> list[TitanicRow]:
    """Read passengers from a Kaggle `train.csv` or `test.csv` file.

    Extra columns (Fare, Cabin, Embarked, ...) are ignored. Empty cells become
    `None`; a missing `Survived` column yields unlabeled passengers.

    Args:
        path (str | Path): Path to the CSV file.

    Returns:
        list[TitanicRow]: Passengers in file order.

    Raises:
        ColumnsNotFoundError: If a required column is missing from the file.
    """
    df = _read_columns(path, _PASSENGER_SCHEMA)
    survived = (
        pl.col("Survived").cast(pl.Int64) if "Survived" in df.columns else pl.lit(None, dtype=pl.Int64)
    ).alias("Survived")
    df = df.select(*_casts(_PASSENGER_SCHEMA), survived)

    rows = [
        TitanicRow(
            passenger_id=record["PassengerId"],
            survived=record["Survived"],
            pclass=record["Pclass"],
            name=record["Name"],
            sex=record["Sex"],
            age=record["Age"],
            sibsp=record["SibSp"],
            parch=record["Parch"],
            ticket=record["Ticket"],
        )
        for record in df.iter_rows(named=True)
    ]
    logger.info("Loaded {} passengers from {}", len(rows), path)
    return rows


def load_check(path: str | Path) -> dict[int, str]:
    """Read ground-truth survival labels, e.g. Kaggle's `gender_submission.csv`.

    Args:
        path (str | Path): Path to a CSV file with `PassengerId` and
            `Survived` columns.

    Returns:
        dict[int, str]: Mapping of passenger id to `"Lived"` or `"Died"`.

    Raises:
        ColumnsNotFoundError: If a required column is missing from the file.
        LabelNotFoundError: If a passenger has an empty `Survived` cell.
    """
    df = _read_columns(path, _CHECK_SCHEMA).select(_casts(_CHECK_SCHEMA))
    check: dict[int, str] = {}
    for passenger_id, survived in df.iter_rows():
        if survived is None:
            raise LabelNotFoundError(passenger_id)
        check[passenger_id] = LIVED if survived == 1 else DIED
    logger.info("Loaded {} ground-truth labels from {}", len(check), path)
    return check


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _read_columns(path: str | Path, schema: dict[str, pl.DataType]) -> pl.DataFrame:
    """Read a CSV file as text and check that the schema's columns exist.

    Args:
        path (str | Path): Path to the CSV file.
        schema (dict[str, pl.DataType]): Required columns and their dtypes.

    Returns:
        pl.DataFrame: Every column of the file, as strings.

    Raises:
        ColumnsNotFoundError: If any schema column is absent from the file.
    """
    df = pl.read_csv(path, infer_schema=False)
    _validate_columns(list(schema), df.columns)
    return df


def _validate_columns(columns: Sequence[str], df_columns: Sequence[str]) -> None:
    """Validate that required columns exist in the loaded file.

    Args:
        columns (Sequence[str]): Required column names.
        df_columns (Sequence[str]): Column names present in the file.

    Raises:
        ColumnsNotFoundError: If any required column is missing.
    """
    missing_columns = set(columns) - set(df_columns)
    if missing_columns:
        raise ColumnsNotFoundError(
            missing_columns=sorted(missing_columns),
            available_columns=list(df_columns),
        )


def _casts(schema: dict[str, pl.DataType]) -> list[pl.Expr]:
    """Build one cast expression per schema column."""
    return [pl.col(name).cast(dtype) for name, dtype in schema.items()]
