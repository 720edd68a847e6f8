"""Errors raised when filling a preview collection."""


class PreviewCollectionError(Exception):
    """Base error for rejected preview collection updates."""


class InvalidIndexError(PreviewCollectionError, IndexError):
    """Slot or entry index outside the contiguous range of the collection."""


class ContractMismatchError(PreviewCollectionError, ValueError):
    """Preview measurement names differ from the collection's contract."""
