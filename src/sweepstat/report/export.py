"""Structured export of previews.

Builds pydantic snapshots from previews for JSON output, and condenses a
mean-preview collection into final per-parameter-value results.
"""

from __future__ import annotations

from sweepstat.aggregation.mean import STD_NAME_PREFIX
from sweepstat.models.types import MeasurementSummary, ParamValueSummary, PreviewTable
from sweepstat.preview.base import Preview
from sweepstat.preview.collection import PreviewCollection


def export_preview(preview: Preview) -> PreviewTable:
    """Snapshot a preview as a PreviewTable.

    Args:
        preview: Leaf or collection to export.

    Returns:
        PreviewTable with names, rows and task metadata. Collections also
        carry their varied parameter name and values.
    """
    varied_param_name = None
    varied_param_values = None
    if preview.is_composite():
        varied_param_name = preview.get_varied_param_name()
        values = preview.get_varied_param_values()
        if values is not None:
            varied_param_values = [float(v) for v in values]

    return PreviewTable(
        measurement_names=preview.get_measurement_names(),
        rows=preview.get_data().tolist(),
        num_entries=preview.num_entries(),
        task_class=preview.get_task_class(),
        varied_param_name=varied_param_name,
        varied_param_values=varied_param_values,
    )


def summarize_mean_preview(mean_previews: PreviewCollection) -> list[ParamValueSummary]:
    """Final mean/std per parameter value from a mean-preview collection.

    Uses the last checkpoint every parameter value shares.

    Args:
        mean_previews: Output of calculate_mean_preview().

    Returns:
        One ParamValueSummary per parameter value slot, in slot order.
    """
    last_entry = mean_previews.min_entry_num - 1
    param_values = mean_previews.get_varied_param_values()
    summaries: list[ParamValueSummary] = []

    for param_index, preview in enumerate(mean_previews.get_previews()):
        names = preview.get_measurement_names()
        row = preview.get_entry_data(last_entry)
        num_base = len(names) // 2
        if names[num_base:] != [STD_NAME_PREFIX + name for name in names[:num_base]]:
            raise ValueError(f"Preview at slot {param_index} is not a mean preview")

        measurements = []
        for m in range(num_base):
            measurements.append(
                MeasurementSummary(
                    name=names[m], mean=float(row[m]), std=float(row[m + num_base])
                )
            )

        param_value = None
        if param_values is not None and param_index < len(param_values):
            param_value = float(param_values[param_index])

        summaries.append(
            ParamValueSummary(
                param_index=param_index,
                param_value=param_value,
                num_entries=preview.num_entries(),
                measurements=measurements,
            )
        )

    return summaries
