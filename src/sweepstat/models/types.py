"""Pydantic models for preview exports.

Plain data snapshots of previews, safe to serialize with model_dump().
"""

from pydantic import BaseModel


class PreviewTable(BaseModel):
    """Full table snapshot of a preview."""

    measurement_names: list[str]
    rows: list[list[float]]
    num_entries: int
    task_class: str | None
    varied_param_name: str | None = None
    varied_param_values: list[float] | None = None
    export_version: str = "1.0"


class MeasurementSummary(BaseModel):
    """Mean and standard deviation of one measurement at the last checkpoint."""

    name: str
    mean: float
    std: float


class ParamValueSummary(BaseModel):
    """Final cross-fold statistics for one parameter value."""

    param_index: int
    param_value: float | None
    num_entries: int
    measurements: list[MeasurementSummary]
