"""stillshot: snapshot testing with reviewable pending/accepted artifacts.

Layout:

- stillshot/core       — Snapshot record and text format
- stillshot/diff       — histogram line diff
- stillshot/transform  — scrub rules, ignore rules, transform pipeline
- stillshot/storage    — snapshot store, paths, identifier normalization
- stillshot/review     — interactive review, accept-all / reject-all
- stillshot/capture    — compare test output against baselines

The command line entry point lives in stillshot_cli.py and cli/.
"""

from .capture import CaptureResult, CaptureStatus, capture, format_values, snap, snap_json, snap_string  # noqa: F401
from .config import StillshotConfig, load_config, open_store  # noqa: F401
from .core.snapshot import Snapshot, deserialize, serialize  # noqa: F401
from .diff import DiffKind, DiffLine, histogram_diff  # noqa: F401
from .errors import (  # noqa: F401
    InvalidIdentifierError,
    MalformedInputError,
    ProjectRootNotFoundError,
    SnapshotFormatError,
    SnapshotIOError,
    SnapshotMismatchError,
    SnapshotNotFoundError,
    StillshotError,
)
from .review import ReviewSummary, accept_all, reject_all, review  # noqa: F401
from .storage import Slot, SnapshotStore, normalize_identifier  # noqa: F401
from .transform import *  # noqa: F401,F403
from .transform import __all__ as _transform_all
from .version import __version__  # noqa: F401

__all__ = [
    "__version__",
    "CaptureResult",
    "CaptureStatus",
    "DiffKind",
    "DiffLine",
    "InvalidIdentifierError",
    "MalformedInputError",
    "ProjectRootNotFoundError",
    "ReviewSummary",
    "Slot",
    "Snapshot",
    "SnapshotFormatError",
    "SnapshotIOError",
    "SnapshotMismatchError",
    "SnapshotNotFoundError",
    "SnapshotStore",
    "StillshotConfig",
    "StillshotError",
    "accept_all",
    "capture",
    "deserialize",
    "format_values",
    "histogram_diff",
    "load_config",
    "normalize_identifier",
    "open_store",
    "reject_all",
    "review",
    "serialize",
    "snap",
    "snap_json",
    "snap_string",
    *_transform_all,
]
