"""Preview tables and collections.

- Preview: shared capability (entries, measurement names, rendering)
- LeafPreview: flat checkpoint x measurement table
- PreviewCollection: interlaced view over child previews
"""

from sweepstat.preview.base import Preview
from sweepstat.preview.collection import PreviewCollection
from sweepstat.preview.errors import (
    ContractMismatchError,
    InvalidIndexError,
    PreviewCollectionError,
)
from sweepstat.preview.leaf import LearningCurve, LeafPreview

__all__ = [
    "ContractMismatchError",
    "InvalidIndexError",
    "LearningCurve",
    "LeafPreview",
    "Preview",
    "PreviewCollection",
    "PreviewCollectionError",
]
