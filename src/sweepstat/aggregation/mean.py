"""Cross-fold mean and standard deviation of preview collections.

Input is a collection of folds, each fold a collection with one preview per
parameter value. Output is a collection with one leaf per parameter value
holding, for every checkpoint, the mean of each measurement over the complete
folds followed by its population standard deviation.

Statistics are computed in two passes: sum then divide, then sum of squared
deviations from the mean then divide and take the square root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from sweepstat.preview.base import Preview
from sweepstat.preview.collection import PreviewCollection
from sweepstat.preview.leaf import LeafPreview

logger = logging.getLogger(__name__)

MEAN_ORDERING_NAME = "mean preview entry id"
PARAM_VALUE_INDEX_NAME = "parameter value id"
STD_NAME_PREFIX = "[std] "
CROSS_VALIDATION_TASK = "cross_validation"

# Outer ordering/index plus the fold's own ordering/index columns
NUM_SYNTHETIC_COLUMNS = 4


@dataclass
class FoldAccumulator:
    """Running statistics for one parameter value across folds.

    Owns its own storage; fold data is only read, never aliased.

    Attributes:
        num_entries: Checkpoints per fold taken into account.
        num_measurements: Base measurements per checkpoint.
    """

    num_entries: int
    num_measurements: int
    num_folds: int = 0
    sums: np.ndarray = field(init=False)
    squared_deviations: np.ndarray = field(init=False)

    def __post_init__(self) -> None:
        shape = (self.num_entries, self.num_measurements)
        self.sums = np.zeros(shape, dtype=np.float64)
        self.squared_deviations = np.zeros(shape, dtype=np.float64)

    def _fold_values(self, preview: Preview) -> np.ndarray:
        return preview.get_data()[: self.num_entries, : self.num_measurements]

    def add(self, preview: Preview) -> None:
        """Add a fold's measurements to the running sums."""
        self.sums += self._fold_values(preview)
        self.num_folds += 1

    def mean(self) -> np.ndarray:
        with np.errstate(divide="ignore", invalid="ignore"):
            return self.sums / self.num_folds

    def add_deviation(self, preview: Preview, mean: np.ndarray) -> None:
        """Add a fold's squared deviations from the mean."""
        diff = mean - self._fold_values(preview)
        self.squared_deviations += diff * diff

    def std(self) -> np.ndarray:
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.sqrt(self.squared_deviations / self.num_folds)


def _complete_fold_previews(
    folds: list[PreviewCollection],
    num_param_values: int,
    param_index: int,
) -> list[Preview]:
    """Previews at `param_index` from folds holding every parameter value."""
    return [
        fold.get_previews()[param_index] for fold in folds if len(fold) == num_param_values
    ]


def _mean_measurement_names(collection: PreviewCollection) -> list[str]:
    base_names = collection.get_measurement_names()[NUM_SYNTHETIC_COLUMNS:]
    return base_names + [STD_NAME_PREFIX + name for name in base_names]


def calculate_mean_preview_for_param(
    collection: PreviewCollection,
    param_index: int,
    entries_per_preview: int,
) -> LeafPreview:
    """Mean and standard deviation of one parameter value over complete folds.

    Folds that do not hold a preview for every parameter value are left out
    of both passes. With no complete fold, all values are NaN.

    Args:
        collection: Collection of fold collections.
        param_index: Parameter value slot to aggregate.
        entries_per_preview: Checkpoints per fold to aggregate.

    Returns:
        Leaf preview with mean columns followed by standard deviation columns.
    """
    num_param_values = len(collection.get_varied_param_values())
    fold_previews = _complete_fold_previews(
        collection.get_previews(), num_param_values, param_index
    )
    names = _mean_measurement_names(collection)

    accumulator = FoldAccumulator(
        num_entries=entries_per_preview,
        num_measurements=len(names) // 2,
    )
    for preview in fold_previews:
        accumulator.add(preview)
    mean = accumulator.mean()

    for preview in fold_previews:
        accumulator.add_deviation(preview, mean)
    std = accumulator.std()

    rows = np.hstack([mean, std])
    return LeafPreview.from_rows(names, rows, task_class=CROSS_VALIDATION_TASK)


def calculate_mean_preview(collection: PreviewCollection) -> PreviewCollection:
    """Collapse the fold level of a collection into mean previews.

    Only collections of collections (folds x parameter values) are averaged.
    An empty collection or a collection of leaf previews is returned as is.

    Args:
        collection: Collection whose children are per-fold collections.

    Returns:
        Collection with one mean preview per parameter value.

    Raises:
        ValueError: If the collection has no varied parameter values.
    """
    previews = collection.get_previews()
    if not previews or not previews[0].is_composite():
        return collection

    param_values = collection.get_varied_param_values()
    if param_values is None or len(param_values) == 0:
        raise ValueError("Varied parameter values are required to average over folds")

    num_folds = len(previews)
    num_param_values = len(param_values)
    complete_folds = [fold for fold in previews if len(fold) == num_param_values]
    num_complete = len(complete_folds)
    if complete_folds:
        entries_per_preview = min(fold.min_entry_num for fold in complete_folds)
    else:
        entries_per_preview = collection.num_entries() // num_folds // num_param_values

    if num_complete < num_folds:
        logger.debug(
            f"Excluding {num_folds - num_complete} of {num_folds} folds without "
            f"{num_param_values} parameter values"
        )

    mean_previews: PreviewCollection[LeafPreview] = PreviewCollection(
        MEAN_ORDERING_NAME,
        PARAM_VALUE_INDEX_NAME,
        CROSS_VALIDATION_TASK,
        collection.get_varied_param_name(),
        param_values,
    )
    if entries_per_preview == 0:
        logger.debug("No checkpoint is shared by every fold, nothing to average")
        return mean_previews

    for param_index in range(num_param_values):
        mean_preview = calculate_mean_preview_for_param(
            collection, param_index, entries_per_preview
        )
        mean_previews.set_preview(param_index, mean_preview)

    logger.info(
        f"Averaged {num_complete} complete folds over {num_param_values} parameter "
        f"values ({entries_per_preview} entries each)"
    )
    return mean_previews
