"""Collections of previews with an interlaced view.

A PreviewCollection holds one child preview per slot (e.g. one per fold or
per parameter value). All children share the same measurement names. The
collection exposes the common prefix of every child as a single table whose
rows cycle through the slots round-robin:

    entry 0 -> slot 0 row 0, entry 1 -> slot 1 row 0, ..., entry n -> slot 0 row 1

Two synthetic leading columns hold the interlaced entry index and the slot.
"""

from __future__ import annotations

import logging
from typing import Generic, Sequence, TypeVar

import numpy as np

from sweepstat.preview.base import Preview
from sweepstat.preview.errors import ContractMismatchError, InvalidIndexError

logger = logging.getLogger(__name__)

PreviewT = TypeVar("PreviewT", bound=Preview)


class PreviewCollection(Preview, Generic[PreviewT]):
    """Ordered, index-addressable collection of child previews.

    The first non-empty child fixes the measurement-name contract; later
    children must match it exactly. Only the shortest child length is
    exposed per slot so every interlaced row is backed by real data.
    """

    def __init__(
        self,
        ordering_name: str,
        index_name: str,
        task_class: str | None = None,
        varied_param_name: str | None = None,
        varied_param_values: Sequence[float] | np.ndarray | None = None,
    ):
        """Initialize an empty collection.

        Args:
            ordering_name: Label of the interlaced entry index column.
            index_name: Label of the child slot column.
            task_class: Identity of the task using this collection.
            varied_param_name: Name of the swept parameter, if any.
            varied_param_values: Swept parameter values, one per slot.
        """
        self.ordering_name = ordering_name
        self.index_name = index_name
        self.task_class = task_class
        self.varied_param_name = varied_param_name
        self.varied_param_values = (
            None
            if varied_param_values is None
            else np.asarray(varied_param_values, dtype=np.float64)
        )
        self._previews: list[PreviewT] = []
        self._required_measurement_names: list[str] | None = None
        self._min_entry_num = 0

    # ------------------------------------------------------------------
    # Filling
    # ------------------------------------------------------------------

    def set_preview(self, preview_index: int, preview: PreviewT) -> None:
        """Place a preview at a slot.

        Empty previews are ignored. A preview only replaces the current
        occupant of a slot when it has strictly more entries.

        Args:
            preview_index: Slot index, at most the current number of slots.
            preview: Preview whose measurement names match the contract.

        Raises:
            InvalidIndexError: If the index skips ahead of the filled slots.
            ContractMismatchError: If the measurement names differ from the
                names of the first preview added.
        """
        num_entries = preview.num_entries()
        if num_entries == 0:
            logger.debug(f"Ignoring empty preview for slot {preview_index}")
            return

        if preview_index < 0 or preview_index > len(self._previews):
            raise InvalidIndexError(f"The given index ({preview_index}) is invalid.")

        names = preview.get_measurement_names()
        required = self._required_measurement_names
        if required is not None:
            if len(names) != len(required):
                raise ContractMismatchError(
                    f"Preview has {len(names)} measurement names, "
                    f"collection requires {len(required)}"
                )
            if names != required:
                raise ContractMismatchError(
                    f"Measurement names {names} differ from required {required}"
                )
        else:
            self._required_measurement_names = names

        if preview_index == len(self._previews):
            self._previews.append(preview)
        elif num_entries > self._previews[preview_index].num_entries():
            self._previews[preview_index] = preview
        else:
            logger.debug(
                f"Keeping slot {preview_index}: stored preview has at least "
                f"{num_entries} entries"
            )
            return

        self._min_entry_num = min(p.num_entries() for p in self._previews)

    # ------------------------------------------------------------------
    # Preview interface
    # ------------------------------------------------------------------

    def num_entries(self) -> int:
        return self._min_entry_num * len(self._previews)

    def get_measurement_name_count(self) -> int:
        return len(self.get_measurement_names())

    def get_measurement_name(self, measurement_index: int) -> str:
        return self.get_measurement_names()[measurement_index]

    def get_measurement_names(self) -> list[str]:
        return [self.ordering_name, self.index_name] + self.get_required_measurement_names()

    def get_task_class(self) -> str | None:
        return self.task_class

    def is_composite(self) -> bool:
        return True

    def _locate(self, entry_index: int) -> tuple[int, int]:
        """Map an interlaced entry index to (slot, row within slot)."""
        if not 0 <= entry_index < self.num_entries():
            raise InvalidIndexError(
                f"Entry index {entry_index} out of range for {self.num_entries()} entries"
            )
        num_previews = len(self._previews)
        return entry_index % num_previews, entry_index // num_previews

    def get_entry_data(self, entry_index: int) -> np.ndarray:
        """Row of the interlaced view.

        Layout: [entry_index, slot, <child row values>].

        Raises:
            InvalidIndexError: If the collection is empty or the index is
                outside the interlaced range.
        """
        slot, row = self._locate(entry_index)
        child_entry = self._previews[slot].get_entry_data(row)
        entry = np.empty(2 + len(child_entry), dtype=np.float64)
        entry[0] = entry_index
        entry[1] = slot
        entry[2:] = child_entry
        return entry

    def entry_to_string(self, entry_index: int) -> str:
        if not self._previews:
            return ""
        slot, row = self._locate(entry_index)
        return self.slot_entry_to_string(slot, row)

    def slot_entry_to_string(self, slot: int, row: int) -> str:
        """Render row `row` of child `slot` with its interlaced ordering value."""
        ordering_value = row * len(self._previews) + slot
        return f"{ordering_value},{slot},{self._previews[slot].entry_to_string(row)}"

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._previews)

    @property
    def min_entry_num(self) -> int:
        return self._min_entry_num

    def get_previews(self) -> list[PreviewT]:
        return list(self._previews)

    def get_required_measurement_names(self) -> list[str]:
        if self._required_measurement_names is None:
            return []
        return list(self._required_measurement_names)

    def get_ordering_name(self) -> str:
        return self.ordering_name

    def get_index_name(self) -> str:
        return self.index_name

    def get_varied_param_name(self) -> str | None:
        return self.varied_param_name

    def get_varied_param_values(self) -> np.ndarray | None:
        return self.varied_param_values

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def calculate_mean_preview(self) -> PreviewCollection:
        """Average over folds; see aggregation.mean.calculate_mean_preview."""
        from sweepstat.aggregation.mean import calculate_mean_preview

        return calculate_mean_preview(self)
