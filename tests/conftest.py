"""Shared pytest fixtures for sweepstat tests."""

import pytest

from sweepstat.preview import LeafPreview, PreviewCollection


@pytest.fixture
def make_leaf():
    """Factory for leaf previews with the default accuracy/kappa contract."""

    def _make_leaf(rows, names=("acc", "kappa"), task_class=None):
        return LeafPreview.from_rows(list(names), rows, task_class=task_class)

    return _make_leaf


@pytest.fixture
def make_fold():
    """Factory for a fold collection holding one leaf per parameter value."""

    def _make_fold(param_rows, names=("m1", "m2"), param_values=(0.1, 0.2)):
        fold = PreviewCollection(
            "fold entry id", "param id", varied_param_name="p", varied_param_values=param_values
        )
        for param_index, rows in enumerate(param_rows):
            fold.set_preview(param_index, LeafPreview.from_rows(list(names), rows))
        return fold

    return _make_fold
