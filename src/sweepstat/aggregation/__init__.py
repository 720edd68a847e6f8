"""Aggregation of fold collections into mean previews.

- Reads preview collections, produces new collections
- Forbidden: mutating the input collections or their children
"""

from sweepstat.aggregation.mean import (
    CROSS_VALIDATION_TASK,
    FoldAccumulator,
    calculate_mean_preview,
    calculate_mean_preview_for_param,
)

__all__ = [
    "CROSS_VALIDATION_TASK",
    "FoldAccumulator",
    "calculate_mean_preview",
    "calculate_mean_preview_for_param",
]
