"""Snapshot store: pending/baseline slots and the review state machine.

Per identifier:
  no files                  -> save(pending)  -> pending
  baseline                  -> save(pending)  -> baseline + pending
  pending (+ baseline)      -> accept()       -> baseline (pending content)
  pending (+ baseline)      -> reject()       -> baseline unchanged, no pending

Every write goes to a temporary file in the snapshot directory and is moved
into place with os.replace, so a failed write never leaves a truncated slot.
accept() writes the baseline before deleting the pending file; if either
step fails the pending file is still there and accept() can be retried.
"""

from __future__ import annotations

import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import List, Union

from stillshot.core.snapshot import Snapshot, deserialize, serialize
from stillshot.errors import (
    SnapshotFormatError,
    SnapshotIOError,
    SnapshotNotFoundError,
)
from stillshot.logging import get_logger
from stillshot.storage.paths import SUFFIXES, ensure_snapshot_dir, normalize_identifier

_LOG = get_logger("storage")

# NamedTemporaryFile creates files 0600; snapshot files are written 0644.
FILE_MODE = 0o644


class Slot(str, Enum):
    PENDING = "pending"
    BASELINE = "baseline"


SlotLike = Union[Slot, str]


def _slot(slot: SlotLike) -> Slot:
    return slot if isinstance(slot, Slot) else Slot(slot)


class SnapshotStore:
    """Snapshot files under one directory. Not safe for concurrent use by several processes."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def __repr__(self) -> str:
        return f"SnapshotStore({str(self.directory)!r})"

    def path_for(self, test_name: str, slot: SlotLike) -> Path:
        s = _slot(slot)
        return self.directory / (normalize_identifier(test_name) + SUFFIXES[s.value])

    def exists(self, test_name: str, slot: SlotLike) -> bool:
        return self.path_for(test_name, slot).is_file()

    def _read_text(self, test_name: str, slot: Slot) -> str:
        path = self.path_for(test_name, slot)
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise SnapshotNotFoundError(normalize_identifier(test_name), slot.value) from exc
        except OSError as exc:
            raise SnapshotIOError(f"cannot read {path}: {exc}") from exc
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SnapshotFormatError(f"{path} is not valid UTF-8") from exc

    def _write_atomic(self, path: Path, text: str) -> None:
        tmp_name = None
        try:
            ensure_snapshot_dir(self.directory)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=self.directory,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(text)
            os.chmod(tmp_name, FILE_MODE)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise SnapshotIOError(f"cannot write {path}: {exc}") from exc

    def save(self, snapshot: Snapshot, slot: SlotLike = Slot.PENDING) -> Path:
        """Serialize snapshot into slot, replacing any existing file there."""
        s = _slot(slot)
        path = self.path_for(snapshot.test_name, s)
        self._write_atomic(path, serialize(snapshot))
        _LOG.debug("stillshot: saved %s snapshot %s", s.value, path.name)
        return path

    def read(self, test_name: str, slot: SlotLike) -> Snapshot:
        """Load snapshot from slot. Raises SnapshotNotFoundError or SnapshotFormatError."""
        s = _slot(slot)
        text = self._read_text(test_name, s)
        try:
            return deserialize(text)
        except SnapshotFormatError as exc:
            raise SnapshotFormatError(f"{self.path_for(test_name, s)}: {exc}") from exc

    def list_pending(self) -> List[str]:
        """Identifiers with a pending snapshot, sorted."""
        if not self.directory.is_dir():
            return []
        suffix = SUFFIXES[Slot.PENDING.value]
        try:
            entries = list(self.directory.iterdir())
        except OSError as exc:
            raise SnapshotIOError(f"cannot list {self.directory}: {exc}") from exc
        names = [
            p.name[: -len(suffix)]
            for p in entries
            if p.name.endswith(suffix) and not p.name.startswith(".") and p.is_file()
        ]
        return sorted(names)

    def accept(self, test_name: str) -> Snapshot:
        """Promote the pending snapshot to baseline and remove the pending file."""
        text = self._read_text(test_name, Slot.PENDING)
        pending_path = self.path_for(test_name, Slot.PENDING)
        try:
            snapshot = deserialize(text)
        except SnapshotFormatError as exc:
            raise SnapshotFormatError(f"{pending_path}: {exc}") from exc
        self._write_atomic(self.path_for(test_name, Slot.BASELINE), text)
        try:
            pending_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise SnapshotIOError(f"accepted but cannot remove {pending_path}: {exc}") from exc
        _LOG.debug("stillshot: accepted %s", normalize_identifier(test_name))
        return snapshot

    def reject(self, test_name: str) -> None:
        """Delete the pending snapshot; the baseline is left untouched."""
        path = self.path_for(test_name, Slot.PENDING)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise SnapshotNotFoundError(normalize_identifier(test_name), Slot.PENDING.value) from exc
        except OSError as exc:
            raise SnapshotIOError(f"cannot remove {path}: {exc}") from exc
        _LOG.debug("stillshot: rejected %s", normalize_identifier(test_name))
