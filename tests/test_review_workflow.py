"""Tests for stillshot.review (interactive review, bulk accept/reject, prompt parsing)."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console
from rich.panel import Panel

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stillshot.core.snapshot import Snapshot
from stillshot.diff import histogram_diff
from stillshot.errors import SnapshotNotFoundError
from stillshot.review import (
    ReviewChoice,
    accept_all,
    diff_to_text,
    read_review_choice,
    reject_all,
    render_diff,
    render_new_snapshot,
    review,
)
from stillshot.review.prompt import parse_choice
from stillshot.storage.store import Slot, SnapshotStore


def _snap(name: str, content: str) -> Snapshot:
    return Snapshot(version="0.1.0", test_name=name, content=content)


def _seed(store: SnapshotStore) -> None:
    """test_a: changed, test_b: new, test_c: new."""
    store.save(_snap("TestA", "old"), Slot.BASELINE)
    store.save(_snap("TestA", "new"), Slot.PENDING)
    store.save(_snap("TestB", "b"), Slot.PENDING)
    store.save(_snap("TestC", "c"), Slot.PENDING)


def _scripted(*choices: ReviewChoice):
    it = iter(choices)
    return lambda index, total, identifier: next(it)


def test_parse_choice_aliases() -> None:
    assert parse_choice("a") is ReviewChoice.ACCEPT
    assert parse_choice(" Reject ") is ReviewChoice.REJECT
    assert parse_choice("S") is ReviewChoice.SKIP
    assert parse_choice("d") is ReviewChoice.TOGGLE_DIFF
    assert parse_choice("quit") is ReviewChoice.QUIT
    assert parse_choice("x") is None
    assert parse_choice("") is None


def test_read_review_choice_reprompts_on_invalid_input() -> None:
    with patch("builtins.input", side_effect=["", "maybe", "r"]) as mocked:
        choice = read_review_choice("? ")
    assert choice is ReviewChoice.REJECT
    assert mocked.call_count == 3


def test_read_review_choice_end_of_input_means_quit() -> None:
    with patch("builtins.input", side_effect=EOFError):
        assert read_review_choice("? ") is ReviewChoice.QUIT


def test_review_with_nothing_pending(store: SnapshotStore) -> None:
    shown = []
    summary = review(store, ask=_scripted(), show=shown.append)
    assert summary.reviewed == 0
    assert summary.ok
    assert shown == []


def test_review_applies_each_decision(store: SnapshotStore) -> None:
    _seed(store)
    summary = review(
        store,
        ask=_scripted(ReviewChoice.ACCEPT, ReviewChoice.REJECT, ReviewChoice.SKIP),
        show=lambda renderable: None,
    )
    assert summary.accepted == ["test_a"]
    assert summary.rejected == ["test_b"]
    assert summary.skipped == ["test_c"]
    assert not summary.interrupted
    assert store.read("TestA", Slot.BASELINE).content == "new"
    assert not store.exists("TestB", Slot.PENDING)
    assert not store.exists("TestB", Slot.BASELINE)
    assert store.list_pending() == ["test_c"]


def test_review_quit_keeps_earlier_transitions(store: SnapshotStore) -> None:
    _seed(store)
    summary = review(store, ask=_scripted(ReviewChoice.ACCEPT, ReviewChoice.QUIT), show=lambda r: None)
    assert summary.interrupted
    assert summary.accepted == ["test_a"]
    assert store.read("TestA", Slot.BASELINE).content == "new"
    assert store.list_pending() == ["test_b", "test_c"]


def test_review_with_mocked_input(store: SnapshotStore) -> None:
    _seed(store)
    with patch("builtins.input", side_effect=["?", "a", "s", "r"]):
        summary = review(store, show=lambda r: None)
    assert summary.to_dict() == {
        "accepted": ["test_a"],
        "rejected": ["test_c"],
        "skipped": ["test_b"],
        "failed": [],
        "interrupted": False,
    }


def test_review_toggle_diff_redisplays_without_deciding(store: SnapshotStore) -> None:
    store.save(_snap("TestA", "old"), Slot.BASELINE)
    store.save(_snap("TestA", "new"), Slot.PENDING)
    shown = []
    summary = review(
        store,
        ask=_scripted(ReviewChoice.TOGGLE_DIFF, ReviewChoice.TOGGLE_DIFF, ReviewChoice.SKIP),
        show=shown.append,
    )
    assert summary.skipped == ["test_a"]
    assert len(shown) == 3
    titles = [panel.title.plain for panel in shown]
    assert titles[0].startswith("Snapshot diff")
    assert titles[1].startswith("New snapshot")
    assert titles[2].startswith("Snapshot diff")


def test_review_shows_new_snapshot_when_baseline_is_corrupt(store: SnapshotStore) -> None:
    store.save(_snap("TestA", "new"), Slot.PENDING)
    store.path_for("TestA", Slot.BASELINE).write_text("garbage", encoding="utf-8")
    shown = []
    summary = review(store, ask=_scripted(ReviewChoice.ACCEPT), show=shown.append)
    assert summary.accepted == ["test_a"]
    assert shown[0].title.plain.startswith("New snapshot")
    assert store.read("TestA", Slot.BASELINE).content == "new"


def test_review_counts_unreadable_pending_as_failed(store: SnapshotStore) -> None:
    store.save(_snap("TestB", "b"), Slot.PENDING)
    store.path_for("TestA", Slot.PENDING).write_text("garbage", encoding="utf-8")
    summary = review(store, ask=_scripted(ReviewChoice.ACCEPT), show=lambda r: None)
    assert summary.failed == ["test_a"]
    assert summary.accepted == ["test_b"]
    assert not summary.ok


def test_accept_all_promotes_everything(store: SnapshotStore) -> None:
    _seed(store)
    assert accept_all(store) == ["test_a", "test_b", "test_c"]
    assert store.list_pending() == []
    assert [store.read(n, Slot.BASELINE).content for n in ("TestA", "TestB", "TestC")] == ["new", "b", "c"]


def test_reject_all_keeps_baselines(store: SnapshotStore) -> None:
    _seed(store)
    assert reject_all(store) == ["test_a", "test_b", "test_c"]
    assert store.list_pending() == []
    assert store.read("TestA", Slot.BASELINE).content == "old"
    with pytest.raises(SnapshotNotFoundError):
        store.read("TestB", Slot.BASELINE)


def test_accept_all_stops_on_first_failure(store: SnapshotStore) -> None:
    _seed(store)
    store.path_for("TestB", Slot.PENDING).write_text("garbage", encoding="utf-8")
    with pytest.raises(ValueError):
        accept_all(store)
    assert store.read("TestA", Slot.BASELINE).content == "new"
    assert store.list_pending() == ["test_b", "test_c"]


def test_render_diff_and_new_snapshot_print() -> None:
    baseline = _snap("test_mod t[param]", "a\nb\nc")
    pending = _snap("test_mod t[param]", "a\nx\nc")
    console = Console(record=True, width=80)
    panel = render_diff(baseline, pending)
    assert isinstance(panel, Panel)
    console.print(panel)
    console.print(render_new_snapshot(pending))
    text = console.export_text()
    assert "t[param]" in text
    assert "-1 +1" in text
    assert "+ x" in text


def test_diff_to_text_columns() -> None:
    text = diff_to_text(histogram_diff("a\nb\nc", "a\nx\nc"))
    assert text.splitlines() == [
        "1 1   a",
        "2   - b",
        "  2 + x",
        "3 3   c",
    ]


def test_render_summary_text() -> None:
    from stillshot.review import ReviewSummary, render_summary

    summary = ReviewSummary(accepted=["a"], rejected=[], skipped=["b", "c"], failed=["d"], interrupted=True)
    assert render_summary(summary).plain == "Accepted 1, rejected 0, skipped 2, failed 1 (interrupted)"
