"""
stillshot CLI

Entry point: environment loading, argument parsing and dispatch only.
All command logic lives in cli.handlers.
"""

import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from cli.wiring import build_parser, dispatch_command
from stillshot.version import __version__


def _load_environment(env_file: Optional[Path] = None) -> None:
    """Load STILLSHOT_* settings from .env; the project file wins over the shell."""
    path = env_file if env_file is not None else Path.cwd() / ".env"
    if path.is_file():
        load_dotenv(path, override=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    _load_environment()
    parser = build_parser(version=__version__)
    args = parser.parse_args(argv)
    return dispatch_command(parser, args)


if __name__ == "__main__":
    sys.exit(main())
