"""Review workflow: walk pending snapshots and apply accept/reject decisions.

Each decision is applied immediately through the store, so quitting half
way keeps every transition made so far.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from rich.console import Console

from stillshot.core.snapshot import Snapshot
from stillshot.errors import (
    SnapshotFormatError,
    SnapshotNotFoundError,
    StillshotError,
)
from stillshot.logging import get_logger
from stillshot.review.prompt import PROMPT, ReviewChoice, read_review_choice
from stillshot.review.render import render_diff, render_new_snapshot
from stillshot.storage.store import Slot, SnapshotStore

_LOG = get_logger("review")

AskFn = Callable[[int, int, str], ReviewChoice]
ShowFn = Callable[[Any], None]


@dataclass
class ReviewSummary:
    accepted: List[str] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    interrupted: bool = False

    @property
    def reviewed(self) -> int:
        return len(self.accepted) + len(self.rejected) + len(self.skipped)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {
            "accepted": list(self.accepted),
            "rejected": list(self.rejected),
            "skipped": list(self.skipped),
            "failed": list(self.failed),
            "interrupted": self.interrupted,
        }


def _default_ask(index: int, total: int, identifier: str) -> ReviewChoice:
    return read_review_choice(f"[{index}/{total}] {identifier} {PROMPT}")


def _view(pending: Snapshot, baseline: Optional[Snapshot], show_diff: bool) -> Any:
    if baseline is not None and show_diff:
        return render_diff(baseline, pending)
    return render_new_snapshot(pending)


def _read_baseline(store: SnapshotStore, identifier: str) -> Optional[Snapshot]:
    try:
        return store.read(identifier, Slot.BASELINE)
    except SnapshotNotFoundError:
        return None
    except SnapshotFormatError as exc:
        _LOG.warning("stillshot: baseline for %s is unreadable, showing as new: %s", identifier, exc)
        return None


def _apply(store: SnapshotStore, identifier: str, choice: ReviewChoice, summary: ReviewSummary) -> None:
    try:
        if choice is ReviewChoice.ACCEPT:
            store.accept(identifier)
            summary.accepted.append(identifier)
            _LOG.info("stillshot: accepted %s", identifier)
        else:
            store.reject(identifier)
            summary.rejected.append(identifier)
            _LOG.info("stillshot: rejected %s", identifier)
    except StillshotError as exc:
        summary.failed.append(identifier)
        _LOG.error("stillshot: failed to %s %s: %s", choice.value, identifier, exc)


def review(
    store: SnapshotStore,
    *,
    ask: Optional[AskFn] = None,
    show: Optional[ShowFn] = None,
) -> ReviewSummary:
    """Interactive review of every pending snapshot, in identifier order."""
    ask = ask or _default_ask
    show = show or Console().print
    summary = ReviewSummary()
    pending_ids = store.list_pending()
    if not pending_ids:
        _LOG.info("stillshot: no pending snapshots to review")
        return summary
    _LOG.info("stillshot: %d pending snapshot(s) to review", len(pending_ids))

    total = len(pending_ids)
    for index, identifier in enumerate(pending_ids, start=1):
        try:
            pending = store.read(identifier, Slot.PENDING)
        except StillshotError as exc:
            summary.failed.append(identifier)
            _LOG.error("stillshot: cannot read pending snapshot %s: %s", identifier, exc)
            continue
        baseline = _read_baseline(store, identifier)
        show_diff = baseline is not None
        show(_view(pending, baseline, show_diff))

        while True:
            choice = ask(index, total, identifier)
            if choice is ReviewChoice.TOGGLE_DIFF:
                if baseline is not None:
                    show_diff = not show_diff
                show(_view(pending, baseline, show_diff))
                continue
            if choice is ReviewChoice.QUIT:
                summary.interrupted = True
                _LOG.info("stillshot: review interrupted")
                return summary
            if choice is ReviewChoice.SKIP:
                summary.skipped.append(identifier)
                _LOG.info("stillshot: skipped %s", identifier)
            else:
                _apply(store, identifier, choice, summary)
            break

    _LOG.info(
        "stillshot: review complete (%d accepted, %d rejected, %d skipped)",
        len(summary.accepted),
        len(summary.rejected),
        len(summary.skipped),
    )
    return summary


def accept_all(store: SnapshotStore) -> List[str]:
    """Accept every pending snapshot. Stops at and raises the first failure."""
    done: List[str] = []
    for identifier in store.list_pending():
        store.accept(identifier)
        done.append(identifier)
    _LOG.info("stillshot: accepted %d snapshot(s)", len(done))
    return done


def reject_all(store: SnapshotStore) -> List[str]:
    """Reject every pending snapshot. Stops at and raises the first failure."""
    done: List[str] = []
    for identifier in store.list_pending():
        store.reject(identifier)
        done.append(identifier)
    _LOG.info("stillshot: rejected %d snapshot(s)", len(done))
    return done
