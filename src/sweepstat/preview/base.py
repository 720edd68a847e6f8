"""Base preview interface.

A preview is an ordered table of named numeric measurements taken at
successive checkpoints. Leaves store the table directly; collections
expose an interlaced view over several child previews.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Preview(ABC):
    """Abstract base class for previews.

    Subclasses provide entry access and measurement names; header,
    bulk data and textual rendering are derived here.
    """

    @abstractmethod
    def num_entries(self) -> int:
        """Number of entries (rows) available."""

    @abstractmethod
    def get_measurement_name_count(self) -> int:
        """Number of measurement names (columns)."""

    @abstractmethod
    def get_measurement_name(self, measurement_index: int) -> str:
        """Name of the measurement at the given column."""

    @abstractmethod
    def get_entry_data(self, entry_index: int) -> np.ndarray:
        """Row values for one entry, one float per measurement name."""

    @abstractmethod
    def entry_to_string(self, entry_index: int) -> str:
        """Comma-separated rendering of one entry."""

    @abstractmethod
    def get_task_class(self) -> str | None:
        """Identity of the task that produced this preview."""

    def is_composite(self) -> bool:
        """Whether this preview is made of child previews."""
        return False

    def get_measurement_names(self) -> list[str]:
        return [
            self.get_measurement_name(i) for i in range(self.get_measurement_name_count())
        ]

    def get_data(self) -> np.ndarray:
        """Return all entries as a 2-D float64 array.

        Returns:
            Array of shape (num_entries, measurement_name_count).
        """
        num_entries = self.num_entries()
        data = np.empty((num_entries, self.get_measurement_name_count()), dtype=np.float64)
        for entry_index in range(num_entries):
            data[entry_index] = self.get_entry_data(entry_index)
        return data

    def header_to_string(self) -> str:
        return ",".join(self.get_measurement_names())

    def get_description(self, indent: int = 0) -> str:
        """Render the header line followed by one line per entry.

        Args:
            indent: Number of spaces placed before each entry line.

        Returns:
            Multi-line textual report.
        """
        padding = " " * indent
        lines = [self.header_to_string()]
        for entry_index in range(self.num_entries()):
            lines.append(padding + self.entry_to_string(entry_index))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.get_description(0)
