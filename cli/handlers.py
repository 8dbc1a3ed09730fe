"""CLI command handlers: review, accept-all, reject-all, list, show, help.

Each handler resolves configuration, opens the snapshot store and returns a
process exit code (0 success, 1 failure). Errors are reported through the
stillshot logger, never as tracebacks.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from rich.console import Console

from stillshot.config import load_config
from stillshot.errors import SnapshotNotFoundError, StillshotError
from stillshot.logging import configure_cli_logging, get_logger
from stillshot.review import (
    accept_all,
    reject_all,
    render_diff,
    render_new_snapshot,
    render_summary,
    review,
)
from stillshot.storage.paths import normalize_identifier
from stillshot.storage.store import Slot, SnapshotStore


def _clog() -> Any:
    return get_logger("cli")


def _err(msg: str) -> None:
    """Log unified error message (via logger, respects --quiet)."""
    _clog().error("stillshot: %s", msg)


def _console() -> Console:
    return Console()


def _open_store(args: Any) -> Optional[SnapshotStore]:
    """Resolve config and store from args; None after logging an error."""
    root = getattr(args, "root", None)
    try:
        cfg = load_config(project_root=root) if root else load_config()
    except StillshotError as exc:
        _err(str(exc))
        return None
    if cfg.log_level:
        configure_cli_logging(
            quiet=getattr(args, "quiet", False),
            verbose=getattr(args, "verbose", False),
            level=cfg.log_level,
        )
    _clog().debug("stillshot: snapshot dir %s", cfg.snapshot_path)
    return SnapshotStore(cfg.snapshot_path)


def handle_help(parser: Any) -> int:
    """Print command overview and detailed argparse help."""
    print("stillshot: snapshot review")
    print()
    print("Commands:")
    print("  review          interactively accept/reject pending snapshots (default)")
    print("  accept-all      accept every pending snapshot")
    print("  reject-all      reject every pending snapshot")
    print("  list [--json]   list pending snapshots")
    print("  show <name>     show one pending snapshot against its baseline")
    print()
    print("  --help after any command for details.")
    print()
    parser.print_help()
    return 0


def handle_review(args: Any) -> int:
    store = _open_store(args)
    if store is None:
        return 1
    console = _console()
    try:
        summary = review(store, show=console.print)
    except StillshotError as exc:
        _err(str(exc))
        return 1
    if summary.reviewed or summary.failed:
        console.print(render_summary(summary))
    return 0 if summary.ok else 1


def handle_accept_all(args: Any) -> int:
    store = _open_store(args)
    if store is None:
        return 1
    try:
        done = accept_all(store)
    except StillshotError as exc:
        _err(f"accept-all stopped: {exc}")
        return 1
    print(f"Accepted {len(done)} snapshot(s)")
    return 0


def handle_reject_all(args: Any) -> int:
    store = _open_store(args)
    if store is None:
        return 1
    try:
        done = reject_all(store)
    except StillshotError as exc:
        _err(f"reject-all stopped: {exc}")
        return 1
    print(f"Rejected {len(done)} snapshot(s)")
    return 0


def handle_list(args: Any) -> int:
    store = _open_store(args)
    if store is None:
        return 1
    try:
        pending = store.list_pending()
    except StillshotError as exc:
        _err(str(exc))
        return 1
    rows = [
        {"identifier": ident, "state": "changed" if store.exists(ident, Slot.BASELINE) else "new"}
        for ident in pending
    ]
    if getattr(args, "json", False):
        print(json.dumps({"pending": rows, "path": str(store.directory)}, indent=2, ensure_ascii=False))
        return 0
    if not rows:
        print("No pending snapshots")
        return 0
    for row in rows:
        print(f"{row['identifier']}  ({row['state']})")
    return 0


def handle_show(args: Any) -> int:
    store = _open_store(args)
    if store is None:
        return 1
    try:
        ident = normalize_identifier(args.name)
        pending = store.read(ident, Slot.PENDING)
    except SnapshotNotFoundError:
        _err(f"no pending snapshot for {args.name!r}")
        return 1
    except StillshotError as exc:
        _err(str(exc))
        return 1
    try:
        baseline = store.read(ident, Slot.BASELINE)
    except SnapshotNotFoundError:
        baseline = None
    except StillshotError as exc:
        _err(str(exc))
        return 1
    console = _console()
    console.print(render_diff(baseline, pending) if baseline is not None else render_new_snapshot(pending))
    return 0
