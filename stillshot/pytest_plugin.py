"""pytest plugin: the ``snapshot`` fixture.

    def test_invoice(snapshot):
        snapshot.assert_json(render_invoice(), scrub_uuids())

Registered through the ``pytest11`` entry point. Snapshots are stored under
the pytest rootdir unless STILLSHOT_PROJECT_ROOT / [tool.stillshot] say
otherwise.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import pytest

from stillshot.capture import CaptureResult, snap, snap_json, snap_string
from stillshot.config import ENV_PROJECT_ROOT, load_config
from stillshot.storage.store import SnapshotStore


class SnapshotAssertion:
    """Snapshot helpers bound to one test."""

    def __init__(
        self,
        store: SnapshotStore,
        test_name: str,
        *,
        func_name: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> None:
        self.store = store
        self.test_name = test_name
        self.func_name = func_name
        self.file_name = file_name
        self._untitled = 0

    def _name(self, title: Optional[str]) -> str:
        if title:
            return f"{self.test_name} {title}"
        self._untitled += 1
        if self._untitled == 1:
            return self.test_name
        return f"{self.test_name} {self._untitled}"

    def _meta(self, title: Optional[str]) -> dict:
        return {"title": title, "func_name": self.func_name, "file_name": self.file_name}

    def assert_match(self, *values_and_rules: Any, title: Optional[str] = None) -> CaptureResult:
        return snap(self.store, self._name(title), *values_and_rules, **self._meta(title))

    def assert_string(self, content: str, *rules: Any, title: Optional[str] = None) -> CaptureResult:
        return snap_string(self.store, self._name(title), content, *rules, **self._meta(title))

    def assert_json(self, json_text: str, *rules: Any, title: Optional[str] = None) -> CaptureResult:
        return snap_json(self.store, self._name(title), json_text, *rules, **self._meta(title))


def _store_for(config: pytest.Config) -> SnapshotStore:
    if os.environ.get(ENV_PROJECT_ROOT, "").strip():
        cfg = load_config()
    else:
        cfg = load_config(project_root=Path(config.rootpath))
    return SnapshotStore(cfg.snapshot_path)


def _test_name(node: pytest.Item) -> str:
    # "tests/test_mod.py::TestCls::test_x[p]" -> "test_mod TestCls test_x[p]"
    path_part, _, rest = node.nodeid.partition("::")
    stem = Path(path_part).stem
    return " ".join([stem, *rest.split("::")]) if rest else stem


@pytest.fixture
def snapshot(request: pytest.FixtureRequest) -> SnapshotAssertion:
    node = request.node
    func = getattr(node, "function", None)
    return SnapshotAssertion(
        _store_for(request.config),
        _test_name(node),
        func_name=getattr(func, "__name__", None),
        file_name=node.nodeid.partition("::")[0] or None,
    )
