"""Leaf previews backed by a learning curve table.

A LearningCurve stores checkpoint rows of named measurements. LeafPreview
exposes a curve through the Preview interface so it can be placed in a
PreviewCollection.
"""

from __future__ import annotations

from typing import Mapping, Sequence

import numpy as np

from sweepstat.preview.base import Preview

DEFAULT_ORDERING_NAME = "learning evaluation instances"


def format_row(values: np.ndarray) -> str:
    """Comma-join row values using Python float formatting."""
    return ",".join(str(float(v)) for v in values)


class LearningCurve:
    """Table of checkpoints (rows) by named measurements (columns)."""

    def __init__(self, ordering_name: str = DEFAULT_ORDERING_NAME):
        self.ordering_name = ordering_name
        self._measurement_names: list[str] = []
        self._rows: list[np.ndarray] = []

    def insert_entry(self, measurements: Mapping[str, float]) -> None:
        """Append one checkpoint row.

        Names not seen before become new columns; earlier rows are padded
        with NaN for them. Known names missing from this row are NaN.

        Args:
            measurements: Measurement name to value for this checkpoint.
        """
        new_names = [name for name in measurements if name not in self._measurement_names]
        if new_names:
            self._measurement_names.extend(new_names)
            width = len(self._measurement_names)
            self._rows = [
                np.concatenate([row, np.full(width - len(row), np.nan)]) for row in self._rows
            ]

        row = np.full(len(self._measurement_names), np.nan, dtype=np.float64)
        for column, name in enumerate(self._measurement_names):
            if name in measurements:
                row[column] = measurements[name]
        self._rows.append(row)

    def set_data(
        self,
        measurement_names: Sequence[str],
        rows: Sequence[Sequence[float]] | np.ndarray,
    ) -> None:
        """Replace all measurement names and rows.

        Rows are copied into fresh float64 storage.

        Raises:
            ValueError: If a row length differs from the number of names.
        """
        names = list(measurement_names)
        copied: list[np.ndarray] = []
        for entry_index, row in enumerate(rows):
            values = np.array(row, dtype=np.float64)
            if values.shape != (len(names),):
                raise ValueError(
                    f"Row {entry_index} has {values.size} values, "
                    f"expected {len(names)} measurements"
                )
            copied.append(values)
        self._measurement_names = names
        self._rows = copied

    def num_entries(self) -> int:
        return len(self._rows)

    def get_measurement_name_count(self) -> int:
        return len(self._measurement_names)

    def get_measurement_name(self, measurement_index: int) -> str:
        return self._measurement_names[measurement_index]

    def get_measurement_names(self) -> list[str]:
        return list(self._measurement_names)

    def get_entry_data(self, entry_index: int) -> np.ndarray:
        return self._rows[entry_index].copy()

    def get_data(self) -> np.ndarray:
        if not self._rows:
            return np.empty((0, len(self._measurement_names)), dtype=np.float64)
        return np.vstack(self._rows)

    def header_to_string(self) -> str:
        return ",".join(self._measurement_names)

    def entry_to_string(self, entry_index: int) -> str:
        return format_row(self._rows[entry_index])


class LeafPreview(Preview):
    """Preview wrapping a single LearningCurve.

    Attributes:
        curve: The wrapped table.
        task_class: Identity of the task that produced the curve.
    """

    def __init__(self, curve: LearningCurve, task_class: str | None = None):
        self.curve = curve
        self.task_class = task_class

    @classmethod
    def from_rows(
        cls,
        measurement_names: Sequence[str],
        rows: Sequence[Sequence[float]] | np.ndarray,
        task_class: str | None = None,
        ordering_name: str = DEFAULT_ORDERING_NAME,
    ) -> LeafPreview:
        """Build a leaf preview from names and row values.

        Args:
            measurement_names: Column names.
            rows: One sequence of values per checkpoint.
            task_class: Identity of the producing task.
            ordering_name: Label of the curve's ordering axis.

        Returns:
            LeafPreview over a fresh LearningCurve.
        """
        curve = LearningCurve(ordering_name)
        curve.set_data(measurement_names, rows)
        return cls(curve, task_class)

    def num_entries(self) -> int:
        return self.curve.num_entries()

    def get_measurement_name_count(self) -> int:
        return self.curve.get_measurement_name_count()

    def get_measurement_name(self, measurement_index: int) -> str:
        return self.curve.get_measurement_name(measurement_index)

    def get_measurement_names(self) -> list[str]:
        return self.curve.get_measurement_names()

    def get_entry_data(self, entry_index: int) -> np.ndarray:
        return self.curve.get_entry_data(entry_index)

    def get_data(self) -> np.ndarray:
        return self.curve.get_data()

    def entry_to_string(self, entry_index: int) -> str:
        return self.curve.entry_to_string(entry_index)

    def get_task_class(self) -> str | None:
        return self.task_class
