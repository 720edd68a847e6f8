"""Tests for preview collections: slot management, contract, interlacing."""

import numpy as np
import pytest

from sweepstat.preview import (
    ContractMismatchError,
    InvalidIndexError,
    LeafPreview,
    PreviewCollection,
    PreviewCollectionError,
)


def rows_of(length, start=0.0, width=2):
    """Rows whose first value encodes the row index offset by start."""
    return [[start + i] + [0.0] * (width - 1) for i in range(length)]


@pytest.fixture
def collection():
    return PreviewCollection("id", "fold", task_class="cross_validation")


class TestSetPreview:
    """Test filling slots."""

    def test_first_preview_sets_contract(self, collection, make_leaf):
        """First non-empty preview fixes the measurement names."""
        collection.set_preview(0, make_leaf(rows_of(3)))

        assert collection.get_required_measurement_names() == ["acc", "kappa"]
        assert collection.get_measurement_names() == ["id", "fold", "acc", "kappa"]
        assert len(collection) == 1
        assert collection.min_entry_num == 3

    def test_empty_preview_ignored(self, collection, make_leaf):
        """Previews without entries are dropped silently."""
        collection.set_preview(0, make_leaf([]))

        assert len(collection) == 0
        assert collection.get_required_measurement_names() == []
        assert collection.num_entries() == 0

    def test_empty_preview_with_far_index_is_not_an_error(self, collection, make_leaf):
        """Emptiness is checked before the index."""
        collection.set_preview(5, make_leaf([]))

        assert len(collection) == 0

    def test_index_equal_to_size_extends(self, collection, make_leaf):
        """Slots grow one at a time."""
        collection.set_preview(0, make_leaf(rows_of(2)))
        collection.set_preview(1, make_leaf(rows_of(2)))

        assert len(collection) == 2

    def test_index_skipping_ahead_raises(self, collection, make_leaf):
        """An index beyond the current size is rejected."""
        collection.set_preview(0, make_leaf(rows_of(2)))

        with pytest.raises(InvalidIndexError):
            collection.set_preview(2, make_leaf(rows_of(2)))
        assert len(collection) == 1

    def test_first_preview_at_nonzero_index_raises(self, collection, make_leaf):
        """An invalid first call does not capture a contract."""
        with pytest.raises(InvalidIndexError):
            collection.set_preview(1, make_leaf(rows_of(2)))

        assert collection.get_required_measurement_names() == []

    def test_negative_index_raises(self, collection, make_leaf):
        """Negative slot indices are invalid."""
        with pytest.raises(InvalidIndexError):
            collection.set_preview(-1, make_leaf(rows_of(2)))

    def test_invalid_index_is_index_error(self, collection, make_leaf):
        """InvalidIndexError is catchable as IndexError."""
        with pytest.raises(IndexError):
            collection.set_preview(3, make_leaf(rows_of(1)))

    def test_longer_replacement_is_stored(self, collection, make_leaf):
        """A slot takes a preview with strictly more entries."""
        collection.set_preview(0, make_leaf(rows_of(2)))
        longer = make_leaf(rows_of(4))
        collection.set_preview(0, longer)

        assert collection.get_previews()[0] is longer
        assert collection.min_entry_num == 4

    def test_shorter_replacement_is_noop(self, collection, make_leaf):
        """A shorter preview never downgrades a slot."""
        stored = make_leaf(rows_of(4))
        collection.set_preview(0, stored)
        collection.set_preview(1, make_leaf(rows_of(3)))

        collection.set_preview(0, make_leaf(rows_of(1)))

        assert collection.get_previews()[0] is stored
        assert collection.min_entry_num == 3

    def test_equal_length_replacement_is_noop(self, collection, make_leaf):
        """Equal-length previews do not replace the occupant."""
        stored = make_leaf(rows_of(2))
        collection.set_preview(0, stored)
        collection.set_preview(0, make_leaf(rows_of(2, start=10)))

        assert collection.get_previews()[0] is stored

    def test_min_entry_num_tracks_shortest_slot(self, collection, make_leaf):
        """min_entry_num is the minimum over populated slots."""
        collection.set_preview(0, make_leaf(rows_of(5)))
        collection.set_preview(1, make_leaf(rows_of(2)))
        collection.set_preview(2, make_leaf(rows_of(4)))
        assert collection.min_entry_num == 2

        collection.set_preview(1, make_leaf(rows_of(6)))
        assert collection.min_entry_num == 4


class TestContract:
    """Test measurement-name contract enforcement."""

    def test_different_name_count_raises(self, collection, make_leaf):
        """A preview with a different number of names is rejected."""
        collection.set_preview(0, make_leaf(rows_of(2)))

        with pytest.raises(ContractMismatchError):
            collection.set_preview(1, make_leaf(rows_of(2, width=3), names=("acc", "kappa", "t")))

    def test_different_names_raise(self, collection, make_leaf):
        """A preview with other names is rejected."""
        collection.set_preview(0, make_leaf(rows_of(2)))

        with pytest.raises(ContractMismatchError):
            collection.set_preview(1, make_leaf(rows_of(2), names=("acc", "f1")))

    def test_reordered_names_raise(self, collection, make_leaf):
        """Name order is part of the contract."""
        collection.set_preview(0, make_leaf(rows_of(2)))

        with pytest.raises(ContractMismatchError):
            collection.set_preview(1, make_leaf(rows_of(2), names=("kappa", "acc")))

    def test_mismatch_leaves_state_unchanged(self, collection, make_leaf):
        """A rejected preview does not alter slots or min_entry_num."""
        stored = make_leaf(rows_of(3))
        collection.set_preview(0, stored)

        with pytest.raises(ContractMismatchError):
            collection.set_preview(1, make_leaf(rows_of(1), names=("x", "y")))
        with pytest.raises(ContractMismatchError):
            collection.set_preview(0, make_leaf(rows_of(9), names=("x", "y")))

        assert collection.get_previews() == [stored]
        assert collection.min_entry_num == 3
        assert collection.num_entries() == 3
        assert collection.get_measurement_names() == ["id", "fold", "acc", "kappa"]

    def test_mismatch_errors_share_base(self, collection, make_leaf):
        """Both error kinds derive from PreviewCollectionError."""
        collection.set_preview(0, make_leaf(rows_of(1)))

        with pytest.raises(PreviewCollectionError):
            collection.set_preview(1, make_leaf(rows_of(1), names=("x", "y")))
        with pytest.raises(PreviewCollectionError):
            collection.set_preview(4, make_leaf(rows_of(1)))


class TestInterlacing:
    """Test the interlaced view over child previews."""

    def test_num_entries_is_min_times_children(self, collection, make_leaf):
        """num_entries exposes the common prefix of every child."""
        collection.set_preview(0, make_leaf(rows_of(5)))
        collection.set_preview(1, make_leaf(rows_of(3)))
        collection.set_preview(2, make_leaf(rows_of(4)))

        assert collection.num_entries() == collection.min_entry_num * len(collection) == 9

    def test_round_robin_order(self, collection, make_leaf):
        """Entries cycle through slots before advancing rows."""
        collection.set_preview(0, make_leaf(rows_of(3, start=0)))
        collection.set_preview(1, make_leaf(rows_of(3, start=100)))

        lines = [collection.entry_to_string(i) for i in range(collection.num_entries())]

        assert lines == [
            "0,0,0.0,0.0",
            "1,1,100.0,0.0",
            "2,0,1.0,0.0",
            "3,1,101.0,0.0",
            "4,0,2.0,0.0",
            "5,1,102.0,0.0",
        ]

    def test_entry_data_layout(self, collection, make_leaf):
        """Entry data is [entry index, slot, child row...]."""
        collection.set_preview(0, make_leaf([[1, 2], [3, 4]]))
        collection.set_preview(1, make_leaf([[5, 6], [7, 8]]))

        data = collection.get_entry_data(3)

        assert data.dtype == np.float64
        assert data.tolist() == [3.0, 1.0, 7.0, 8.0]

    def test_get_data_stacks_interlaced_rows(self, collection, make_leaf):
        """get_data returns every interlaced row."""
        collection.set_preview(0, make_leaf([[1, 2], [3, 4], [9, 9]]))
        collection.set_preview(1, make_leaf([[5, 6], [7, 8]]))

        data = collection.get_data()

        assert data.shape == (4, 4)
        assert data[:, 1].tolist() == [0.0, 1.0, 0.0, 1.0]
        assert data[:, 2].tolist() == [1.0, 5.0, 3.0, 7.0]

    def test_slot_entry_to_string(self, collection, make_leaf):
        """Addressing by slot and row uses the interlaced ordering value."""
        collection.set_preview(0, make_leaf([[1, 2], [3, 4]]))
        collection.set_preview(1, make_leaf([[5, 6], [7, 8]]))

        assert collection.slot_entry_to_string(0, 1) == "2,0,3.0,4.0"

    def test_empty_collection_entry_to_string_is_empty(self, collection):
        """An empty collection renders entries as empty strings."""
        assert collection.entry_to_string(0) == ""

    def test_empty_collection_entry_data_raises(self, collection):
        """An empty collection has no entry data."""
        with pytest.raises(InvalidIndexError):
            collection.get_entry_data(0)

    def test_entry_beyond_common_prefix_raises(self, collection, make_leaf):
        """Rows past the shortest child are not exposed."""
        collection.set_preview(0, make_leaf(rows_of(5)))
        collection.set_preview(1, make_leaf(rows_of(1)))

        with pytest.raises(InvalidIndexError):
            collection.get_entry_data(2)


class TestRendering:
    """Test header and description output."""

    def test_header(self, make_leaf):
        """Header joins ordering, index and contract names."""
        collection = PreviewCollection("id", "fold")
        collection.set_preview(0, make_leaf([[0.9]], names=("acc",)))

        assert collection.header_to_string() == "id,fold,acc"

    def test_description(self, make_leaf):
        """Description is header plus interlaced lines."""
        collection = PreviewCollection("id", "fold")
        collection.set_preview(0, make_leaf([[0.5], [0.6]], names=("acc",)))
        collection.set_preview(1, make_leaf([[0.7], [0.8]], names=("acc",)))

        assert str(collection) == "id,fold,acc\n0,0,0.5\n1,1,0.7\n2,0,0.6\n3,1,0.8"

    def test_empty_description_is_header_only(self):
        """Without children only the synthetic columns are listed."""
        assert str(PreviewCollection("id", "fold")) == "id,fold"


class TestMetadata:
    """Test metadata accessors."""

    def test_metadata_returned_verbatim(self):
        """Task class and varied parameter are stored as given."""
        collection = PreviewCollection("id", "fold", "cross_validation", "budget", [0.1, 0.5])

        assert collection.get_task_class() == "cross_validation"
        assert collection.get_ordering_name() == "id"
        assert collection.get_index_name() == "fold"
        assert collection.get_varied_param_name() == "budget"
        assert collection.get_varied_param_values().tolist() == [0.1, 0.5]
        assert collection.is_composite() is True

    def test_varied_param_values_default_none(self):
        collection = PreviewCollection("id", "fold")

        assert collection.get_varied_param_name() is None
        assert collection.get_varied_param_values() is None

    def test_nested_collection_contract(self, make_leaf):
        """Collections can hold collections; their names form the contract."""
        inner = PreviewCollection("inner id", "param")
        inner.set_preview(0, make_leaf([[1, 2]]))
        outer = PreviewCollection("outer id", "fold")
        outer.set_preview(0, inner)

        assert outer.get_measurement_names() == [
            "outer id", "fold", "inner id", "param", "acc", "kappa",
        ]
        assert outer.get_entry_data(0).tolist() == [0.0, 0.0, 0.0, 0.0, 1.0, 2.0]
        assert outer.entry_to_string(0) == "0,0,0,0,1.0,2.0"
