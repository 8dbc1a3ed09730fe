"""
Snapshot storage paths and identifier normalization.

All snapshot artifacts live under project_root/__snapshots__/:
  <identifier>.snap      accepted baseline
  <identifier>.snap.new  pending snapshot awaiting review

The identifier mapping is part of the storage format: changing it orphans
existing stores.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional

from stillshot.errors import InvalidIdentifierError, ProjectRootNotFoundError

SNAPSHOT_DIR = "__snapshots__"

# Slot name -> filename suffix
SUFFIXES = {
    "baseline": ".snap",
    "pending": ".snap.new",
}

PROJECT_MARKERS = ("pyproject.toml", "setup.cfg", "setup.py")

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_identifier(test_name: str) -> str:
    """Map a test name to a filesystem-safe identifier.

    "TestHTTPClient" -> "test_h_t_t_p_client". Idempotent.
    """
    chars = []
    for i, ch in enumerate(test_name):
        if i > 0 and "A" <= ch <= "Z":
            chars.append("_")
        chars.append(ch)
    ident = _NON_ALNUM.sub("_", "".join(chars).lower()).strip("_")
    if not ident:
        raise InvalidIdentifierError(f"test name {test_name!r} has no usable characters")
    return ident


def snapshot_filename(test_name: str, slot: str) -> str:
    return normalize_identifier(test_name) + SUFFIXES[slot]


def find_project_root(start: Optional[Path] = None, markers: Iterable[str] = PROJECT_MARKERS) -> Path:
    """Walk up from start (default: cwd) to the first directory holding a marker file."""
    markers = tuple(markers)
    current = Path(start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if any((candidate / m).is_file() for m in markers):
            return candidate
    raise ProjectRootNotFoundError(
        f"none of {', '.join(markers)} found in {current} or its parents"
    )


def snapshot_dir(root: Path, name: str = SNAPSHOT_DIR) -> Path:
    """Return the snapshot directory for a project: root/<name>."""
    path = Path(name)
    if path.is_absolute():
        return path
    return Path(root).resolve() / path


def ensure_snapshot_dir(path: Path) -> None:
    """Create the snapshot directory if it does not exist. Call before first write."""
    Path(path).mkdir(parents=True, exist_ok=True)
