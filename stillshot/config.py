"""Configuration: project root, snapshot directory and log level.

Sources, later ones win:
  1. defaults
  2. [tool.stillshot] in the project's pyproject.toml
  3. STILLSHOT_* environment variables

Computed once per invocation and passed explicitly to the store.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from stillshot.errors import StillshotError
from stillshot.logging import get_logger
from stillshot.storage.paths import SNAPSHOT_DIR, find_project_root, snapshot_dir
from stillshot.storage.store import SnapshotStore

_LOG = get_logger("config")

ENV_PROJECT_ROOT = "STILLSHOT_PROJECT_ROOT"
ENV_SNAPSHOT_DIR = "STILLSHOT_SNAPSHOT_DIR"
ENV_LOG_LEVEL = "STILLSHOT_LOG_LEVEL"


@dataclass
class StillshotConfig:
    project_root: Path
    snapshot_dir: str = SNAPSHOT_DIR
    log_level: Optional[str] = None

    @property
    def snapshot_path(self) -> Path:
        return snapshot_dir(self.project_root, self.snapshot_dir)


def _load_pyproject_section(project_root: Path) -> Dict[str, Any]:
    """Return [tool.stillshot] from pyproject.toml, or {} when absent."""
    pyproject = project_root / "pyproject.toml"
    if not pyproject.is_file():
        return {}
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise StillshotError(f"cannot parse {pyproject}: {exc}") from exc
    section = (data.get("tool") or {}).get("stillshot") or {}
    if not isinstance(section, dict):
        _LOG.warning("stillshot: ignoring non-table [tool.stillshot] in %s", pyproject)
        return {}
    return section


def load_config(start: Optional[Path] = None, *, project_root: Optional[Path] = None) -> StillshotConfig:
    """Resolve configuration. Raises ProjectRootNotFoundError if no project marker is found."""
    env_root = os.environ.get(ENV_PROJECT_ROOT, "").strip()
    if project_root is not None:
        root = Path(project_root).resolve()
    elif env_root:
        root = Path(env_root).resolve()
    else:
        root = find_project_root(start)

    section = _load_pyproject_section(root)
    config = StillshotConfig(project_root=root)
    if section.get("snapshot_dir"):
        config.snapshot_dir = str(section["snapshot_dir"])
    if section.get("log_level"):
        config.log_level = str(section["log_level"]).upper()

    env_dir = os.environ.get(ENV_SNAPSHOT_DIR, "").strip()
    if env_dir:
        config.snapshot_dir = env_dir
    env_level = os.environ.get(ENV_LOG_LEVEL, "").strip()
    if env_level:
        config.log_level = env_level.upper()
    return config


def open_store(config: Optional[StillshotConfig] = None) -> SnapshotStore:
    """Build a SnapshotStore for the configured snapshot directory."""
    cfg = config or load_config()
    return SnapshotStore(cfg.snapshot_path)
