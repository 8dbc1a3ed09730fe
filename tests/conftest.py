"""Pytest configuration. Ensures project root is in sys.path for top-level modules (stillshot_cli, cli)."""
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def _add_project_root_to_path():
    root = Path(__file__).resolve().parent.parent
    import sys
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture
def store(tmp_path: Path):
    """Empty snapshot store under a temporary project."""
    from stillshot.storage.store import SnapshotStore

    return SnapshotStore(tmp_path / "__snapshots__")


@pytest.fixture(autouse=True)
def _clean_stillshot_env(monkeypatch):
    for name in ("STILLSHOT_PROJECT_ROOT", "STILLSHOT_SNAPSHOT_DIR", "STILLSHOT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
