"""Parser wiring extracted from stillshot_cli entrypoint."""

from __future__ import annotations

import argparse
from pathlib import Path


def build_parser(*, version: str) -> argparse.ArgumentParser:
    """Configure top-level CLI parser and subcommands."""
    parser = argparse.ArgumentParser(
        prog="stillshot",
        description="stillshot: review and accept snapshot test changes",
        epilog="Commands: review | accept-all | reject-all | list | show. Use stillshot help for full list.",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {version}")
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command")

    _add_review_commands(subparsers)
    _add_inspect_commands(subparsers)

    subparsers.add_parser("help", help="Show stillshot command overview")

    return parser


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        metavar="PATH",
        help="Project root (default: nearest parent with pyproject.toml, setup.cfg or setup.py)",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Only warnings and errors")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")


def _add_review_commands(subparsers: argparse._SubParsersAction) -> None:
    """Register the state-changing commands: review, accept-all, reject-all."""
    subparsers.add_parser("review", help="Interactively accept or reject pending snapshots (default)")
    subparsers.add_parser("accept-all", help="Accept every pending snapshot")
    subparsers.add_parser("reject-all", help="Reject every pending snapshot")


def _add_inspect_commands(subparsers: argparse._SubParsersAction) -> None:
    list_parser = subparsers.add_parser("list", help="List pending snapshots")
    list_parser.add_argument("--json", action="store_true", help="Machine-readable output")

    show_parser = subparsers.add_parser("show", help="Show one pending snapshot against its baseline")
    show_parser.add_argument("name", type=str, help="Test name or identifier (e.g. TestRender or test_render)")
