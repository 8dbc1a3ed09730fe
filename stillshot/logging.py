"""Logging for stillshot.

One stderr handler lives on the ``stillshot`` logger. Module loggers
(``stillshot.storage``, ``stillshot.review.prompt``, ...) carry no handler
and no level of their own, so whatever level the CLI sets on ``stillshot``
applies to all of them.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER = "stillshot"
ENV_LOG_LEVEL = "STILLSHOT_LOG_LEVEL"


def _level_from(name: Optional[str], default: int = logging.INFO) -> int:
    if not name or not name.strip():
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def _root_logger() -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        logger.setLevel(_level_from(os.environ.get(ENV_LOG_LEVEL)))
    return logger


def configure_cli_logging(*, quiet: bool = False, verbose: bool = False, level: Optional[str] = None) -> None:
    """Set the stillshot log level. --verbose/--quiet win over config, config wins over the environment."""
    if verbose:
        resolved = logging.DEBUG
    elif quiet:
        resolved = logging.WARNING
    else:
        resolved = _level_from(level or os.environ.get(ENV_LOG_LEVEL))
    _root_logger().setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """Return ``stillshot.<name>``; it logs through the shared stillshot handler."""
    _root_logger()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
