"""Error taxonomy for stillshot.

Every error raised by the library derives from StillshotError and also from
the closest builtin, so callers can catch either.
"""

from __future__ import annotations


class StillshotError(Exception):
    """Base class for all stillshot errors."""


class SnapshotNotFoundError(StillshotError, LookupError):
    """Slot file absent: no baseline yet, or nothing pending."""

    def __init__(self, identifier: str, slot: str) -> None:
        super().__init__(f"no {slot} snapshot for {identifier!r}")
        self.identifier = identifier
        self.slot = slot


class SnapshotFormatError(StillshotError, ValueError):
    """Snapshot file present but not a well-formed serialized snapshot."""


class MalformedInputError(StillshotError, ValueError):
    """Structured transform was given content that is not valid JSON."""


class SnapshotIOError(StillshotError, OSError):
    """Filesystem failure while reading or writing the snapshot store."""


class InvalidIdentifierError(StillshotError, ValueError):
    """Test name normalizes to an empty identifier."""


class ProjectRootNotFoundError(StillshotError):
    """No project marker file found in the working directory or its parents."""


class SnapshotMismatchError(StillshotError, AssertionError):
    """Captured content is new or differs from the accepted baseline."""

    def __init__(self, message: str, *, identifier: str, status: str) -> None:
        super().__init__(message)
        self.identifier = identifier
        self.status = status
