"""Core data model: the snapshot record and its serialized form."""

from .snapshot import Snapshot, deserialize, serialize  # noqa: F401

__all__ = ["Snapshot", "serialize", "deserialize"]
