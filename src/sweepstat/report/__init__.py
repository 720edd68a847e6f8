"""Report rendering and structured export of previews.

- text: comma-separated textual reports
- export: pydantic snapshots and final-result summaries
"""

from sweepstat.report.export import export_preview, summarize_mean_preview
from sweepstat.report.text import render_report, write_report

__all__ = [
    "export_preview",
    "render_report",
    "summarize_mean_preview",
    "write_report",
]
