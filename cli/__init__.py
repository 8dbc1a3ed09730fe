"""stillshot command-line package.

Importing it has no side effects; the handlers module opens the snapshot
store only when a command runs.
"""

__all__ = []
