"""sweepstat: preview collections and cross-fold statistics for parameter sweeps."""

from sweepstat.preview import (
    ContractMismatchError,
    InvalidIndexError,
    LearningCurve,
    LeafPreview,
    Preview,
    PreviewCollection,
    PreviewCollectionError,
)

__all__ = [
    "ContractMismatchError",
    "InvalidIndexError",
    "LearningCurve",
    "LeafPreview",
    "Preview",
    "PreviewCollection",
    "PreviewCollectionError",
]
