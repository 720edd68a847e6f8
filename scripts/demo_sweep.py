#!/usr/bin/env python3
"""Demo: cross-validation over a parameter sweep.

Builds synthetic learning curves for every fold and parameter value,
prints the interlaced fold report and the cross-fold mean report, and
writes both to SWEEPSTAT_REPORT_DIR (default: reports/).

Usage:
    python scripts/demo_sweep.py

Exit codes:
    0: Reports written
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from sweepstat.aggregation.mean import CROSS_VALIDATION_TASK  # noqa: E402
from sweepstat.preview import LeafPreview, PreviewCollection  # noqa: E402
from sweepstat.report import (  # noqa: E402
    export_preview,
    summarize_mean_preview,
    write_report,
)

# Constants
NUM_FOLDS = 3
NUM_CHECKPOINTS = 5
PARAM_NAME = "budget"
PARAM_VALUES = [0.1, 0.2, 0.5]
MEASUREMENTS = ["accuracy", "kappa"]
SEED = 42


def build_fold(rng: np.random.Generator) -> PreviewCollection[LeafPreview]:
    """Build one fold: a learning curve per parameter value."""
    fold_previews: PreviewCollection[LeafPreview] = PreviewCollection(
        "fold entry id", "parameter value id", CROSS_VALIDATION_TASK, PARAM_NAME, PARAM_VALUES
    )
    checkpoints = np.arange(1, NUM_CHECKPOINTS + 1)
    for param_index, budget in enumerate(PARAM_VALUES):
        noise = rng.normal(0, 0.01, NUM_CHECKPOINTS)
        accuracy = 0.5 + budget * (1 - np.exp(-checkpoints / 2)) + noise
        kappa = 2 * accuracy - 1
        rows = np.column_stack([accuracy, kappa])
        fold_previews.set_preview(param_index, LeafPreview.from_rows(MEASUREMENTS, rows))
    return fold_previews


def main() -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    report_dir = Path(os.environ.get("SWEEPSTAT_REPORT_DIR", "reports"))
    rng = np.random.default_rng(SEED)

    folds: PreviewCollection[PreviewCollection[LeafPreview]] = PreviewCollection(
        "cv entry id", "fold id", CROSS_VALIDATION_TASK, PARAM_NAME, PARAM_VALUES
    )
    for fold in range(NUM_FOLDS):
        folds.set_preview(fold, build_fold(rng))

    mean_previews = folds.calculate_mean_preview()

    print("=" * 60)
    print(folds)
    print("=" * 60)
    print(mean_previews)
    print("=" * 60)
    for summary in summarize_mean_preview(mean_previews):
        stats = ", ".join(f"{m.name}={m.mean:.3f}+-{m.std:.3f}" for m in summary.measurements)
        print(f"{PARAM_NAME}={summary.param_value}: {stats}")

    write_report(folds, report_dir / "folds.csv")
    write_report(mean_previews, report_dir / "mean.csv")
    (report_dir / "mean.json").write_text(
        export_preview(mean_previews).model_dump_json(indent=2), encoding="utf-8"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
