"""Console rendering for snapshots and diffs (rich), plus a plain-text diff form."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from stillshot.core.snapshot import Snapshot
from stillshot.diff.histogram import histogram_diff, split_lines
from stillshot.diff.models import DiffKind, DiffLine, diff_stats

_MARKERS = {DiffKind.SHARED: " ", DiffKind.REMOVED: "-", DiffKind.ADDED: "+"}
_STYLES = {DiffKind.SHARED: "", DiffKind.REMOVED: "red", DiffKind.ADDED: "green"}


def _num(n: Optional[int]) -> str:
    return "" if n is None else str(n)


def _meta(snapshot: Snapshot) -> Text:
    parts = [snapshot.test_name]
    if snapshot.func_name:
        parts.append(f"{snapshot.func_name}()")
    if snapshot.file_name:
        parts.append(snapshot.file_name)
    return Text("  ".join(parts), style="dim")


def _heading(snapshot: Snapshot, label: str) -> Text:
    # Text, not markup: test names may contain brackets.
    return Text.assemble((label, "bold blue"), ": ", snapshot.title or snapshot.test_name)


def render_new_snapshot(snapshot: Snapshot) -> Panel:
    """Full content of a snapshot with no baseline, every line marked as added."""
    grid = Table.grid(padding=(0, 1))
    grid.add_column(justify="right", style="dim")
    grid.add_column()
    grid.add_column(overflow="fold")
    for n, line in enumerate(split_lines(snapshot.content), start=1):
        grid.add_row(str(n), Text("+", style="green"), Text(line, style="green"))
    return Panel(grid, title=_heading(snapshot, "New snapshot"), subtitle=_meta(snapshot), title_align="left")


def render_diff(
    baseline: Snapshot,
    pending: Snapshot,
    lines: Optional[Sequence[DiffLine]] = None,
) -> Panel:
    """Baseline vs pending diff with old/new line numbers."""
    if lines is None:
        lines = histogram_diff(baseline.content, pending.content)
    grid = Table.grid(padding=(0, 1))
    grid.add_column(justify="right", style="dim")
    grid.add_column(justify="right", style="dim")
    grid.add_column()
    grid.add_column(overflow="fold")
    for dl in lines:
        style = _STYLES[dl.kind]
        grid.add_row(
            _num(dl.old_number),
            _num(dl.new_number),
            Text(_MARKERS[dl.kind], style=style),
            Text(dl.text, style=style),
        )
    stats = diff_stats(lines)
    footer = Text(f"-{stats.removed} +{stats.added}", style="dim")
    return Panel(
        Group(grid, footer),
        title=_heading(pending, "Snapshot diff"),
        subtitle=_meta(pending),
        title_align="left",
    )


def diff_to_text(lines: Sequence[DiffLine]) -> str:
    """Plain-text rendering, one line per DiffLine: old no, new no, marker, text."""
    width = max((len(_num(dl.old_number)) for dl in lines), default=1)
    width = max([width] + [len(_num(dl.new_number)) for dl in lines])
    out: List[str] = []
    for dl in lines:
        out.append(
            f"{_num(dl.old_number):>{width}} {_num(dl.new_number):>{width}} {_MARKERS[dl.kind]} {dl.text}"
        )
    return "\n".join(out)


def print_renderable(renderable: RenderableType, console: Optional[Console] = None) -> None:
    (console or Console()).print(renderable)


def render_summary(summary: Any) -> Text:
    """One-line outcome of a review run (a ReviewSummary)."""
    text = Text.assemble(
        ("Accepted ", "bold"),
        (str(len(summary.accepted)), "green"),
        ", rejected ",
        (str(len(summary.rejected)), "red"),
        ", skipped ",
        str(len(summary.skipped)),
    )
    if summary.failed:
        text.append(f", failed {len(summary.failed)}", style="bold red")
    if summary.interrupted:
        text.append(" (interrupted)", style="yellow")
    return text
