"""Textual reports for previews.

Format: first line is the comma-separated header, then one comma-separated
line per entry. Collections emit their entries in interlaced order.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sweepstat.preview.base import Preview

logger = logging.getLogger(__name__)


def render_report(preview: Preview, indent: int = 0) -> str:
    """Render a preview as header plus one line per entry.

    Args:
        preview: Leaf or collection to render.
        indent: Spaces placed before each entry line.

    Returns:
        Report text without trailing newline.
    """
    return preview.get_description(indent)


def write_report(preview: Preview, path: Path) -> Path:
    """Write the textual report of a preview to a file.

    Parent directories are created as needed.

    Args:
        preview: Leaf or collection to render.
        path: Destination file.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(preview) + "\n", encoding="utf-8")
    logger.info(f"Wrote {preview.num_entries()} entries to {path}")
    return path
