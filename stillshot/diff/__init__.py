"""Line diff engine façade."""

from .histogram import histogram_diff, split_lines  # noqa: F401
from .models import DiffKind, DiffLine, DiffStats, diff_stats, new_side, old_side  # noqa: F401

__all__ = [
    "histogram_diff",
    "split_lines",
    "DiffKind",
    "DiffLine",
    "DiffStats",
    "diff_stats",
    "old_side",
    "new_side",
]
