"""Snapshot record and its on-disk text format.

A serialized snapshot is a header block between two ``---`` lines, one
``key: value`` pair per header line, followed by the raw content verbatim
to end of file::

    ---
    version: 0.1.0
    test_name: test_render_invoice
    title: invoice
    ---
    <content>

Header values are single-line and kept exactly, surrounding spaces included.
The content is never normalized, so trailing whitespace and trailing
newlines survive a round trip.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from stillshot.errors import SnapshotFormatError

DELIMITER = "---"

# Header keys in write order; version and test_name are required.
HEADER_KEYS = ("version", "test_name", "title", "func_name", "file_name")
REQUIRED_KEYS = ("version", "test_name")
OPTIONAL_KEYS = ("title", "func_name", "file_name")
SEPARATOR = ": "


@dataclass
class Snapshot:
    """Single captured test output."""

    version: str
    test_name: str
    content: str
    title: Optional[str] = None
    func_name: Optional[str] = None
    file_name: Optional[str] = None

    def __post_init__(self) -> None:
        # An empty optional field is not written, so it can only read back as None.
        for name in OPTIONAL_KEYS:
            if getattr(self, name) == "":
                setattr(self, name, None)

    def header(self) -> Dict[str, str]:
        """Header fields that will be written, in write order."""
        fields = {
            "version": self.version,
            "test_name": self.test_name,
            "title": self.title,
            "func_name": self.func_name,
            "file_name": self.file_name,
        }
        return {k: v for k, v in fields.items() if k in REQUIRED_KEYS or v is not None}

    def serialize(self) -> str:
        return serialize(self)


def serialize(snapshot: Snapshot) -> str:
    """Render snapshot as header block + raw content."""
    lines = [DELIMITER]
    for key, value in snapshot.header().items():
        value = "" if value is None else str(value)
        if "\n" in value or "\r" in value:
            raise SnapshotFormatError(f"header value for {key!r} must be a single line")
        lines.append(key + SEPARATOR + value)
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n" + snapshot.content


def _parse_header(block: str) -> Dict[str, str]:
    """Split header lines on the first ": ". Values are kept exactly; other lines are ignored."""
    header: Dict[str, str] = {}
    for line in block.split("\n"):
        key, sep, value = line.partition(SEPARATOR)
        if sep and key:
            header[key] = value
    return header


def deserialize(raw: str) -> Snapshot:
    """Parse serialized snapshot text. Raises SnapshotFormatError on malformed input."""
    marker = DELIMITER + "\n"
    if not raw.startswith(marker):
        raise SnapshotFormatError("snapshot must start with a '---' header delimiter")
    end = raw.find("\n" + marker, len(marker) - 1)
    if end < 0:
        raise SnapshotFormatError("snapshot header is not closed by a second '---' delimiter")
    block = raw[len(marker):end]
    content = raw[end + len(marker) + 1:]
    header = _parse_header(block)
    missing = [k for k in REQUIRED_KEYS if k not in header]
    if missing:
        raise SnapshotFormatError(f"snapshot header missing {', '.join(missing)}")
    return Snapshot(
        version=header["version"],
        test_name=header["test_name"],
        content=content,
        title=header.get("title"),
        func_name=header.get("func_name"),
        file_name=header.get("file_name"),
    )
