"""Histogram line diff.

Classifies lines of two texts as shared, removed or added. Each unresolved
window is first trimmed of its common prefix and suffix; the remainder is
split around an anchor: a line occurring exactly once in the old window and
exactly once in the new window. Among candidates the anchor is the line
that is rarest across both whole inputs, then the one whose match extends
into the longest run of equal neighbours, then the earliest in the old
text. Windows without a candidate become all removals followed by all
additions.

The recursion is driven by an explicit work stack, so deeply nested inputs
do not hit the interpreter recursion limit.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Sequence, Tuple

from stillshot.diff.models import DiffLine

_RANGE = 0
_SHARED_RUN = 1

Anchor = Tuple[int, int, int]  # (old start, new start, run length)


def split_lines(content: str) -> List[str]:
    """Split text into lines. Empty text has no lines; a trailing newline yields a final empty line."""
    if not content:
        return []
    return content.split("\n")


def _find_anchor(
    old: Sequence[str],
    new: Sequence[str],
    a0: int,
    a1: int,
    b0: int,
    b1: int,
    weight: Counter,
) -> Optional[Anchor]:
    old_counts = Counter(old[a0:a1])
    new_counts = Counter(new[b0:b1])
    new_pos = {new[j]: j for j in range(b0, b1) if new_counts[new[j]] == 1}

    best: Optional[Anchor] = None
    best_key: Optional[Tuple[int, int, int]] = None
    i = a0
    while i < a1:
        line = old[i]
        j = new_pos.get(line) if old_counts[line] == 1 else None
        if j is None:
            i += 1
            continue
        start_i, start_j = i, j
        while start_i > a0 and start_j > b0 and old[start_i - 1] == new[start_j - 1]:
            start_i -= 1
            start_j -= 1
        end_i, end_j = i + 1, j + 1
        while end_i < a1 and end_j < b1 and old[end_i] == new[end_j]:
            end_i += 1
            end_j += 1
        length = end_i - start_i
        # Every candidate in [i, end_i) lies on this same run.
        for k in range(i, end_i):
            if old_counts[old[k]] == 1 and new_counts[old[k]] == 1:
                key = (weight[old[k]], -length, k)
                if best_key is None or key < best_key:
                    best_key = key
                    best = (start_i, start_j, length)
        i = end_i
    return best


def histogram_diff(old: str, new: str) -> List[DiffLine]:
    """Compute a classified line diff of old vs new. Never raises."""
    a = split_lines(old)
    b = split_lines(new)
    weight: Counter = Counter(a)
    weight.update(b)

    out: List[DiffLine] = []
    stack: List[Tuple[int, ...]] = [(_RANGE, 0, len(a), 0, len(b))]
    while stack:
        task = stack.pop()
        if task[0] == _SHARED_RUN:
            _, i, j, length = task
            for k in range(length):
                out.append(DiffLine.shared(a[i + k], i + k + 1, j + k + 1))
            continue

        _, a0, a1, b0, b1 = task
        while a0 < a1 and b0 < b1 and a[a0] == b[b0]:
            out.append(DiffLine.shared(a[a0], a0 + 1, b0 + 1))
            a0 += 1
            b0 += 1
        suffix = 0
        while a1 - suffix > a0 and b1 - suffix > b0 and a[a1 - suffix - 1] == b[b1 - suffix - 1]:
            suffix += 1
        if suffix:
            stack.append((_SHARED_RUN, a1 - suffix, b1 - suffix, suffix))
            a1 -= suffix
            b1 -= suffix
        if a0 == a1 and b0 == b1:
            continue

        anchor = _find_anchor(a, b, a0, a1, b0, b1, weight)
        if anchor is None:
            for i in range(a0, a1):
                out.append(DiffLine.removed(a[i], i + 1))
            for j in range(b0, b1):
                out.append(DiffLine.added(b[j], j + 1))
            continue

        i, j, length = anchor
        # LIFO: before-range runs first, then the anchor, then the after-range.
        stack.append((_RANGE, i + length, a1, j + length, b1))
        stack.append((_SHARED_RUN, i, j, length))
        stack.append((_RANGE, a0, i, b0, j))
    return out
