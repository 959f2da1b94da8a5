from __future__ import annotations

"""
Logging Domain Data Models.

Defines the configuration, routing state and result objects exchanged
between the router, writer, reader and rotation services and the
interface layer (CLI/session).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sourcelog.domain.constants import (
    ALLOWED_DEBUG_SUBDIRS,
    DEFAULT_ARCHIVE_SUBDIR,
    DEFAULT_DATE_PATTERN,
    DEFAULT_DEBUG_SUBDIR,
)

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class Preference(Enum):
    """Global log-persistence preference."""
    CONTINUE = "Continue"
    IGNORE = "Ignore"

    @classmethod
    def parse(cls, value: str) -> "Preference":
        """Resolve a preference from its case-insensitive name."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown preference: {value!r}")


class Level(Enum):
    """Severity attached explicitly by the caller."""
    INFO = "Info"
    DEBUG = "Debug"
    VERBOSE = "Verbose"

    @classmethod
    def parse(cls, value: str) -> "Level":
        """Resolve a level from its case-insensitive name."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown level: {value!r}")

    @property
    def tag(self) -> str:
        """Bracketed tag written in front of Debug/Verbose entries."""
        return self.value.upper()


class Stream(Enum):
    """Output stream a routed message belongs to."""
    NORMAL = "normal"
    DEBUG = "debug"
    VERBOSE = "verbose"

    @classmethod
    def for_level(cls, level: Level) -> "Stream":
        if level is Level.DEBUG:
            return cls.DEBUG
        if level is Level.VERBOSE:
            return cls.VERBOSE
        return cls.NORMAL

# -----------------------------------------------------------------------------
# CONFIGURATION & STATE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings of a logging session.

    Attributes:
        root_path: Resolved log root directory, or None for host-output-only mode.
        date_pattern: strftime pattern used for the per-day file suffix.
        preference: Whether entries are persisted to disk.
        debug_subdir: Subdirectory receiving diagnostic entries.
        archive_subdir: Subdirectory receiving rotated files.
    """
    root_path: Optional[str] = None
    date_pattern: str = DEFAULT_DATE_PATTERN
    preference: Preference = Preference.CONTINUE
    debug_subdir: str = DEFAULT_DEBUG_SUBDIR
    archive_subdir: str = DEFAULT_ARCHIVE_SUBDIR

    def __post_init__(self) -> None:
        if self.debug_subdir not in ALLOWED_DEBUG_SUBDIRS:
            raise ValueError(
                f"debug_subdir must be one of {ALLOWED_DEBUG_SUBDIRS}, got {self.debug_subdir!r}"
            )
        if not self.date_pattern:
            raise ValueError("date_pattern must not be empty")

    @property
    def enabled(self) -> bool:
        """True when entries are persisted to disk."""
        return self.preference is Preference.CONTINUE


@dataclass
class RouteState:
    """
    Session-scoped routing memory owned by a single router.

    Attributes:
        last_source: Source of the most recent routed message.
        intro_pending: Set on a route change, cleared after the first write.
        degraded_announced: Whether the host-output-only condition was reported.
    """
    last_source: str = ""
    intro_pending: bool = False
    degraded_announced: bool = False

# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LogRecord:
    """One log entry, serialized to a single line and never stored."""
    timestamp: datetime
    level: Level
    source: str
    message: str


@dataclass(frozen=True)
class RouteResult:
    """
    Outcome of a routing decision.

    Attributes:
        target_file: Absolute log file path, or None when no root is available.
        stream: Output stream derived from the level.
        announce: Whether the caller should announce the (new) target.
        source: Normalized source name.
        persist: Whether the writer should append to disk.
    """
    target_file: Optional[str]
    stream: Stream
    announce: bool
    source: str
    persist: bool


@dataclass(frozen=True)
class LogFileInfo:
    """Basic metadata of a log file on disk."""
    name: str
    path: str
    modified: datetime
    size: int


@dataclass(frozen=True)
class ReadResult:
    """Latest matching log file and its tail."""
    file_info: Optional[LogFileInfo]
    tail_lines: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.file_info is not None


@dataclass
class MoveOutcome:
    """Per-file result of a bulk move."""
    moved: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RotationReport:
    """
    Aggregate result of a rotation run.

    Only counts are reported; individual failures are not itemized.

    Attributes:
        executed: Whether the archive/purge phase ran.
        reason: Short description of why it ran or was skipped.
        last_backup: Timestamp derived from the archive marker.
        next_due: Earliest moment the next rotation is due.
        moved: Files moved into the archive.
        purged: Archived files deleted.
        move_failures: Files that could not be moved.
        delete_failures: Archived files that could not be deleted.
    """
    executed: bool
    reason: str
    last_backup: Optional[datetime] = None
    next_due: Optional[datetime] = None
    moved: int = 0
    purged: int = 0
    move_failures: int = 0
    delete_failures: int = 0

    @property
    def total_operations(self) -> int:
        return self.moved + self.purged
