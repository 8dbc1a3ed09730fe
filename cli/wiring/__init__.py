"""stillshot CLI wiring: argparse parser and subcommand dispatch."""

from .dispatch import dispatch_command
from .parser import build_parser

__all__ = ["build_parser", "dispatch_command"]
