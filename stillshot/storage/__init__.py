"""Storage façade: snapshot store and path helpers."""

from .paths import (  # noqa: F401
    SNAPSHOT_DIR,
    find_project_root,
    normalize_identifier,
    snapshot_dir,
)
from .store import Slot, SnapshotStore  # noqa: F401

__all__ = [
    "SNAPSHOT_DIR",
    "Slot",
    "SnapshotStore",
    "find_project_root",
    "normalize_identifier",
    "snapshot_dir",
]
