"""Row adapters for the bundled datasets."""

from __future__ import annotations

from decisions.datasets.fruit import FruitRow, training_data
from decisions.datasets.titanic import TitanicRow, load_check, load_titanic

__all__ = [
    "FruitRow",
    "TitanicRow",
    "load_check",
    "load_titanic",
    "training_data",
]
