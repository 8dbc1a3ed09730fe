"""Diff result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class DiffKind(str, Enum):
    SHARED = "shared"
    REMOVED = "removed"
    ADDED = "added"


@dataclass(frozen=True)
class DiffLine:
    """One line of a comparison. Line numbers are 1-based; None where the side has no line."""

    kind: DiffKind
    text: str
    old_number: Optional[int] = None
    new_number: Optional[int] = None

    @classmethod
    def shared(cls, text: str, old_number: int, new_number: int) -> "DiffLine":
        return cls(DiffKind.SHARED, text, old_number, new_number)

    @classmethod
    def removed(cls, text: str, old_number: int) -> "DiffLine":
        return cls(DiffKind.REMOVED, text, old_number, None)

    @classmethod
    def added(cls, text: str, new_number: int) -> "DiffLine":
        return cls(DiffKind.ADDED, text, None, new_number)


@dataclass(frozen=True)
class DiffStats:
    shared: int = 0
    removed: int = 0
    added: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.removed or self.added)


def diff_stats(lines: Iterable[DiffLine]) -> DiffStats:
    """Count lines per kind."""
    counts = {kind: 0 for kind in DiffKind}
    for line in lines:
        counts[line.kind] += 1
    return DiffStats(
        shared=counts[DiffKind.SHARED],
        removed=counts[DiffKind.REMOVED],
        added=counts[DiffKind.ADDED],
    )


def old_side(lines: Iterable[DiffLine]) -> str:
    """Reassemble the old content from a diff."""
    return "\n".join(dl.text for dl in lines if dl.old_number is not None)


def new_side(lines: Iterable[DiffLine]) -> str:
    """Reassemble the new content from a diff."""
    return "\n".join(dl.text for dl in lines if dl.new_number is not None)


__all__ = ["DiffKind", "DiffLine", "DiffStats", "diff_stats", "old_side", "new_side"]
