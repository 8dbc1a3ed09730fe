"""Capture: compare fresh test output with the accepted baseline.

First run (no baseline) and mismatches both write a pending snapshot and
fail the test; a match touches nothing. A corrupt baseline raises
SnapshotFormatError instead of being treated as a first run.
"""

from __future__ import annotations

import pprint
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from stillshot.core.snapshot import Snapshot
from stillshot.diff.histogram import histogram_diff
from stillshot.diff.models import DiffLine
from stillshot.errors import SnapshotMismatchError, SnapshotNotFoundError
from stillshot.logging import get_logger
from stillshot.review.render import diff_to_text
from stillshot.storage.paths import normalize_identifier
from stillshot.storage.store import Slot, SnapshotStore
from stillshot.transform.pipeline import apply_transforms, split_options
from stillshot.version import __version__

_LOG = get_logger("capture")

REVIEW_HINT = "run 'stillshot review' to accept or reject it"


class CaptureStatus(str, Enum):
    MATCH = "match"
    NEW = "new"
    CHANGED = "changed"


@dataclass
class CaptureResult:
    status: CaptureStatus
    snapshot: Snapshot
    baseline: Optional[Snapshot] = None
    diff: List[DiffLine] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is CaptureStatus.MATCH

    @property
    def identifier(self) -> str:
        return normalize_identifier(self.snapshot.test_name)

    def message(self) -> str:
        if self.status is CaptureStatus.MATCH:
            return f"snapshot {self.identifier} matches"
        if self.status is CaptureStatus.NEW:
            head = f"new snapshot {self.identifier} written; {REVIEW_HINT}"
        else:
            head = f"snapshot {self.identifier} does not match the accepted baseline; {REVIEW_HINT}"
        return head + "\n" + diff_to_text(self.diff)


def capture(
    store: SnapshotStore,
    test_name: str,
    content: str,
    *,
    title: Optional[str] = None,
    func_name: Optional[str] = None,
    file_name: Optional[str] = None,
) -> CaptureResult:
    """Compare content with the baseline; write a pending snapshot when new or changed."""
    snapshot = Snapshot(
        version=__version__,
        test_name=test_name,
        content=content,
        title=title,
        func_name=func_name,
        file_name=file_name,
    )
    try:
        baseline = store.read(test_name, Slot.BASELINE)
    except SnapshotNotFoundError:
        store.save(snapshot, Slot.PENDING)
        _LOG.debug("stillshot: no baseline for %s, wrote pending", test_name)
        return CaptureResult(CaptureStatus.NEW, snapshot, None, histogram_diff("", content))

    if baseline.content == content:
        return CaptureResult(CaptureStatus.MATCH, snapshot, baseline)

    store.save(snapshot, Slot.PENDING)
    _LOG.debug("stillshot: %s differs from baseline, wrote pending", test_name)
    return CaptureResult(
        CaptureStatus.CHANGED,
        snapshot,
        baseline,
        histogram_diff(baseline.content, content),
    )


def format_values(*values: Any) -> str:
    """Text form of captured values: strings verbatim, anything else pretty-printed with sorted keys."""
    parts = [v if isinstance(v, str) else pprint.pformat(v, sort_dicts=True, width=88) for v in values]
    return "\n".join(parts)


def _check(result: CaptureResult) -> CaptureResult:
    if not result.ok:
        raise SnapshotMismatchError(result.message(), identifier=result.identifier, status=result.status.value)
    return result


def snap_string(
    store: SnapshotStore,
    test_name: str,
    content: str,
    *rules: Any,
    title: Optional[str] = None,
    func_name: Optional[str] = None,
    file_name: Optional[str] = None,
) -> CaptureResult:
    """Snapshot text after scrubbing. Raises SnapshotMismatchError unless it matches."""
    scrubbers, ignores, extra = split_options(rules)
    if extra:
        raise TypeError(f"snap_string accepts only scrub/ignore rules after content, got {extra!r}")
    text = apply_transforms(content, scrubbers, ignores)
    return _check(capture(store, test_name, text, title=title, func_name=func_name, file_name=file_name))


def snap_json(
    store: SnapshotStore,
    test_name: str,
    json_text: str,
    *rules: Any,
    title: Optional[str] = None,
    func_name: Optional[str] = None,
    file_name: Optional[str] = None,
) -> CaptureResult:
    """Snapshot JSON after ignore rules, canonical re-serialization and scrubbing."""
    scrubbers, ignores, extra = split_options(rules)
    if extra:
        raise TypeError(f"snap_json accepts only scrub/ignore rules after the JSON text, got {extra!r}")
    text = apply_transforms(json_text, scrubbers, ignores, structured=True)
    return _check(capture(store, test_name, text, title=title, func_name=func_name, file_name=file_name))


def snap(
    store: SnapshotStore,
    test_name: str,
    *values_and_rules: Any,
    title: Optional[str] = None,
    func_name: Optional[str] = None,
    file_name: Optional[str] = None,
) -> CaptureResult:
    """Snapshot arbitrary values; rules may be mixed in anywhere in the argument list."""
    scrubbers, ignores, values = split_options(values_and_rules)
    text = apply_transforms(format_values(*values), scrubbers, ignores)
    return _check(capture(store, test_name, text, title=title, func_name=func_name, file_name=file_name))
