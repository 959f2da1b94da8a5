from __future__ import annotations

"""
Domain Error Taxonomy.

None of these conditions is fatal to the calling process. Components raise
them at the point of failure; the session facade and the rotation manager
convert them into warnings, fallbacks or aggregate counts.
"""

from typing import Optional


class SourceLogError(Exception):
    """Base class for every logging-infrastructure failure."""


class PathResolutionError(SourceLogError):
    """The log root directory could not be determined."""


class DirectoryCreateError(SourceLogError):
    """A parent directory for a log file could not be created."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason or ""
        super().__init__(f"Cannot create directory '{path}': {self.reason}")


class LogWriteError(SourceLogError):
    """Appending an entry to a log file failed."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason or ""
        super().__init__(f"Cannot append to '{path}': {self.reason}")


class LogNotFoundError(SourceLogError):
    """No log file matched the requested filter."""

    def __init__(self, root: str, source_filter: str = "") -> None:
        self.root = root
        self.source_filter = source_filter
        super().__init__(f"No log file matching '{source_filter}' under '{root}'")


class MoveError(SourceLogError):
    """A single file could not be moved into the archive."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason or ""
        super().__init__(f"Cannot move '{path}': {self.reason}")


class DeleteError(SourceLogError):
    """A single archived file could not be purged."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason or ""
        super().__init__(f"Cannot delete '{path}': {self.reason}")
