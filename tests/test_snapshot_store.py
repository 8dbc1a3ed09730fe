"""Tests for stillshot.storage.store (SnapshotStore lifecycle)."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stillshot.core.snapshot import Snapshot
from stillshot.errors import (
    InvalidIdentifierError,
    SnapshotFormatError,
    SnapshotIOError,
    SnapshotNotFoundError,
)
from stillshot.storage.store import Slot, SnapshotStore


def _snap(name: str, content: str, **extra) -> Snapshot:
    return Snapshot(version="0.1.0", test_name=name, content=content, **extra)


def test_path_for_uses_identifier_and_slot_suffix(store: SnapshotStore) -> None:
    assert store.path_for("TestMyFunction", Slot.BASELINE) == store.directory / "test_my_function.snap"
    assert store.path_for("TestMyFunction", "pending") == store.directory / "test_my_function.snap.new"


def test_save_creates_directory_and_pending_file(store: SnapshotStore) -> None:
    assert not store.directory.exists()
    path = store.save(_snap("TestRender", "body"))
    assert path == store.directory / "test_render.snap.new"
    assert path.read_text(encoding="utf-8").endswith("---\nbody")
    assert store.exists("TestRender", Slot.PENDING)
    assert not store.exists("TestRender", Slot.BASELINE)


def test_save_then_read_round_trips(store: SnapshotStore) -> None:
    snap = _snap("TestRender", "a\nb\n", title="render", func_name="test_render")
    store.save(snap, Slot.BASELINE)
    assert store.read("TestRender", Slot.BASELINE) == snap


def test_crlf_content_is_preserved_on_disk(store: SnapshotStore) -> None:
    store.save(_snap("TestCrlf", "one\r\ntwo\r\n"), Slot.PENDING)
    assert store.read("TestCrlf", Slot.PENDING).content == "one\r\ntwo\r\n"
    assert store.path_for("TestCrlf", Slot.PENDING).read_bytes().endswith(b"one\r\ntwo\r\n")


def test_save_replaces_existing_pending(store: SnapshotStore) -> None:
    store.save(_snap("TestA", "first"))
    store.save(_snap("TestA", "second"))
    assert store.read("TestA", Slot.PENDING).content == "second"
    assert store.list_pending() == ["test_a"]


def test_read_missing_raises_not_found(store: SnapshotStore) -> None:
    with pytest.raises(SnapshotNotFoundError) as info:
        store.read("TestMissing", Slot.BASELINE)
    assert info.value.identifier == "test_missing"
    assert info.value.slot == "baseline"


def test_read_corrupt_file_raises_format_error_with_path(store: SnapshotStore) -> None:
    store.directory.mkdir(parents=True)
    path = store.path_for("TestBad", Slot.BASELINE)
    path.write_text("not a snapshot", encoding="utf-8")
    with pytest.raises(SnapshotFormatError) as info:
        store.read("TestBad", Slot.BASELINE)
    assert str(path) in str(info.value)


def test_read_non_utf8_raises_format_error(store: SnapshotStore) -> None:
    store.directory.mkdir(parents=True)
    store.path_for("TestBytes", Slot.PENDING).write_bytes(b"---\n\xff\xfe\n---\n")
    with pytest.raises(SnapshotFormatError):
        store.read("TestBytes", Slot.PENDING)


def test_accept_promotes_pending_and_removes_it(store: SnapshotStore) -> None:
    store.save(_snap("TestA", "old"), Slot.BASELINE)
    store.save(_snap("TestA", "new"), Slot.PENDING)
    accepted = store.accept("TestA")
    assert accepted.content == "new"
    assert store.read("TestA", Slot.BASELINE).content == "new"
    assert not store.exists("TestA", Slot.PENDING)


def test_accept_without_pending_raises_and_keeps_baseline(store: SnapshotStore) -> None:
    store.save(_snap("TestA", "kept"), Slot.BASELINE)
    with pytest.raises(SnapshotNotFoundError):
        store.accept("TestA")
    assert store.read("TestA", Slot.BASELINE).content == "kept"


def test_accept_corrupt_pending_leaves_both_slots(store: SnapshotStore) -> None:
    store.save(_snap("TestA", "kept"), Slot.BASELINE)
    store.path_for("TestA", Slot.PENDING).write_text("garbage", encoding="utf-8")
    with pytest.raises(SnapshotFormatError):
        store.accept("TestA")
    assert store.read("TestA", Slot.BASELINE).content == "kept"
    assert store.path_for("TestA", Slot.PENDING).read_text(encoding="utf-8") == "garbage"


def test_reject_removes_pending_and_keeps_baseline(store: SnapshotStore) -> None:
    store.save(_snap("TestA", "old"), Slot.BASELINE)
    store.save(_snap("TestA", "new"), Slot.PENDING)
    store.reject("TestA")
    assert not store.exists("TestA", Slot.PENDING)
    assert store.read("TestA", Slot.BASELINE).content == "old"


def test_reject_without_pending_raises_not_found(store: SnapshotStore) -> None:
    with pytest.raises(SnapshotNotFoundError):
        store.reject("TestNothing")


def test_list_pending_is_sorted_and_ignores_other_files(store: SnapshotStore) -> None:
    assert store.list_pending() == []
    for name in ("TestZeta", "TestAlpha", "TestMid"):
        store.save(_snap(name, "x"))
    store.save(_snap("TestBaselineOnly", "x"), Slot.BASELINE)
    (store.directory / ".test_hidden.snap.new").write_text("x", encoding="utf-8")
    (store.directory / "notes.txt").write_text("x", encoding="utf-8")
    assert store.list_pending() == ["test_alpha", "test_mid", "test_zeta"]


def test_failed_write_keeps_previous_content_and_leaves_no_temp_file(store: SnapshotStore) -> None:
    store.save(_snap("TestA", "previous"), Slot.BASELINE)
    before = sorted(p.name for p in store.directory.iterdir())
    with patch("stillshot.storage.store.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(SnapshotIOError):
            store.save(_snap("TestA", "next"), Slot.BASELINE)
    assert store.read("TestA", Slot.BASELINE).content == "previous"
    assert sorted(p.name for p in store.directory.iterdir()) == before


def test_io_error_is_an_os_error(store: SnapshotStore) -> None:
    with patch("stillshot.storage.store.os.replace", side_effect=OSError("read-only")):
        with pytest.raises(OSError):
            store.save(_snap("TestA", "x"))


def test_invalid_test_name_is_rejected(store: SnapshotStore) -> None:
    with pytest.raises(InvalidIdentifierError):
        store.save(_snap("!!!", "x"))


def test_store_accepts_string_path(tmp_path: Path) -> None:
    s = SnapshotStore(os.fspath(tmp_path / "snaps"))
    s.save(_snap("TestA", "x"))
    assert s.list_pending() == ["test_a"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_saved_and_accepted_files_are_world_readable(store: SnapshotStore) -> None:
    pending = store.save(_snap("TestMode", "x"))
    assert stat.S_IMODE(pending.stat().st_mode) == 0o644
    store.accept("TestMode")
    baseline = store.path_for("TestMode", Slot.BASELINE)
    assert stat.S_IMODE(baseline.stat().st_mode) == 0o644
