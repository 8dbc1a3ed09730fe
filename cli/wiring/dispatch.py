"""CLI command dispatch wiring extracted from stillshot_cli."""

from __future__ import annotations

import argparse
from typing import Any, Callable

from cli import handlers


def dispatch_command(parser: argparse.ArgumentParser, args: Any) -> int:
    """Dispatch parsed CLI args to the matching command handler."""
    from stillshot.logging import configure_cli_logging

    quiet = getattr(args, "quiet", False)
    verbose = getattr(args, "verbose", False)
    configure_cli_logging(quiet=quiet, verbose=verbose)

    dispatch: dict[str, Callable[[], int]] = {
        "help": lambda: handlers.handle_help(parser),
        "review": lambda: handlers.handle_review(args),
        "accept-all": lambda: handlers.handle_accept_all(args),
        "reject-all": lambda: handlers.handle_reject_all(args),
        "list": lambda: handlers.handle_list(args),
        "show": lambda: handlers.handle_show(args),
    }
    # bare `stillshot` runs review
    command = args.command or "review"
    handler = dispatch.get(command)
    if handler is None:
        return handlers.handle_help(parser)
    return handler()
