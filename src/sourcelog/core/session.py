from __future__ import annotations

"""
Logging Session Facade.

Binds one LoggingConfig to its router, writer, reader and rotation manager.
The session is the object callers hold instead of process-wide globals, so
several independent loggers can coexist in one process. No infrastructure
failure raised below this layer reaches the caller.
"""

import logging
import os
from datetime import datetime
from typing import Callable, List, Optional

from sourcelog.core.services.mover import FileMover
from sourcelog.core.services.path_resolver import PathResolver
from sourcelog.core.services.reader import LogReader
from sourcelog.core.services.rotation import RotationManager
from sourcelog.core.services.router import LogRouter
from sourcelog.core.services.writer import LogWriter
from sourcelog.domain.constants import (
    DEFAULT_AGE_DAYS,
    DEFAULT_ARCHIVE_SUBDIR,
    DEFAULT_CADENCE_DAYS,
    DEFAULT_DATE_PATTERN,
    DEFAULT_DEBUG_SUBDIR,
    DEFAULT_LIST_LIMIT,
    DEFAULT_PURGE_DAYS,
    DEFAULT_TAIL_LINES,
)
from sourcelog.domain.errors import LogWriteError
from sourcelog.domain.models import (
    Level,
    LogFileInfo,
    LoggingConfig,
    Preference,
    ReadResult,
    RotationReport,
)

logger = logging.getLogger(__name__)

_HOST_LEVELS = {
    Level.INFO: logging.INFO,
    Level.DEBUG: logging.DEBUG,
    Level.VERBOSE: logging.DEBUG,
}


class LogSession:
    """
    Per-source logging session.

    Args:
        config: Session configuration; a root-less default is used if omitted.
        clock: Callable returning the current moment (injectable for tests).
        mover: Bulk file mover used by rotation.
        host_logger: Logger receiving announcements and host-only echoes.
    """

    def __init__(
            self,
            config: Optional[LoggingConfig] = None,
            clock: Optional[Callable[[], datetime]] = None,
            mover: Optional[FileMover] = None,
            host_logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or LoggingConfig()
        self._clock = clock or datetime.now
        self._host = host_logger or logger
        self._router = LogRouter(self._config, clock=self._clock)
        self._writer = LogWriter(clock=self._clock)
        self._rotation = RotationManager(self._config, mover=mover, clock=self._clock)

    @classmethod
    def initialize(
            cls,
            root_path: Optional[str] = None,
            preference: Preference = Preference.CONTINUE,
            date_pattern: str = DEFAULT_DATE_PATTERN,
            debug_subdir: str = DEFAULT_DEBUG_SUBDIR,
            archive_subdir: str = DEFAULT_ARCHIVE_SUBDIR,
            resolver: Optional[PathResolver] = None,
            **kwargs,
    ) -> "LogSession":
        """
        Resolve the log root and build a session.

        An unresolvable root does not fail: the session runs in
        host-output-only mode.

        Args:
            root_path: Explicit root override.
            preference: Persist entries (Continue) or not (Ignore).
            date_pattern: strftime pattern of the per-day file suffix.
            debug_subdir: Subdirectory for diagnostic entries.
            archive_subdir: Subdirectory for rotated files.
            resolver: PathResolver instance (injectable for tests).
            **kwargs: Forwarded to the constructor (clock, mover, host_logger).

        Returns:
            LogSession: Ready-to-use session.
        """
        resolver = resolver or PathResolver()
        root = resolver.try_resolve(root_path)
        config = LoggingConfig(
            root_path=root,
            date_pattern=date_pattern,
            preference=preference,
            debug_subdir=debug_subdir,
            archive_subdir=archive_subdir,
        )
        return cls(config, **kwargs)

    # ------------------------------------------------------------------
    # INTROSPECTION
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoggingConfig:
        return self._config

    @property
    def logging_path(self) -> Optional[str]:
        """Resolved log root, or None in host-output-only mode."""
        return self._config.root_path

    @property
    def router(self) -> LogRouter:
        return self._router

    # ------------------------------------------------------------------
    # OPERATIONS
    # ------------------------------------------------------------------

    def log(
            self,
            message: str,
            source: Optional[str] = None,
            level: Level = Level.INFO,
            diagnostic: bool = False,
            explicit_path: Optional[str] = None,
            passthrough: bool = False,
    ) -> Optional[str]:
        """
        Route and persist one message.

        Args:
            message: Message text.
            source: Logical source name or script path.
            level: Entry severity.
            diagnostic: Route into the debug subdirectory.
            explicit_path: Overrides the computed target file.
            passthrough: Return the formatted line for console display.

        Returns:
            Optional[str]: The formatted line when passthrough is requested.
        """
        route = self._router.route(
            message,
            source=source,
            explicit_path=explicit_path,
            level=level,
            diagnostic=diagnostic,
        )
        line = self._writer.format_line(level, message, source=route.source)

        if route.target_file is None:
            if route.announce:
                self._host.warning("No log root available; logging to host output only.")
            self._echo(level, line)
            return line if passthrough else None

        if route.announce:
            self._host.info(f"Logging to {route.target_file}")

        if not route.persist:
            self._echo(level, line)
            return line if passthrough else None

        state = self._router.state
        parent = os.path.dirname(route.target_file)
        ensure_dir = state.intro_pending or not os.path.isdir(parent)

        try:
            self._writer.append_line(route.target_file, line, ensure_dir=ensure_dir)
        except LogWriteError as e:
            self._host.warning(str(e))
            self._echo(level, line)
            return line if passthrough else None

        state.intro_pending = False
        return line if passthrough else None

    def read_latest(self, source_filter: str = "", line_count: int = DEFAULT_TAIL_LINES) -> ReadResult:
        """Tail the newest log file matching the filter."""
        if not self.logging_path:
            self._host.warning("No log root available; nothing to read.")
            return ReadResult(file_info=None)
        return LogReader(self.logging_path).read_latest(source_filter, line_count)

    def list_recent(self, source_filter: str = "", limit: int = DEFAULT_LIST_LIMIT) -> List[LogFileInfo]:
        """Enumerate the newest log files matching the filter."""
        if not self.logging_path:
            return []
        return LogReader(self.logging_path).list_recent(source_filter, limit)

    def rotate(
            self,
            path: Optional[str] = None,
            age_days: int = DEFAULT_AGE_DAYS,
            purge_days: int = DEFAULT_PURGE_DAYS,
            cadence_days: int = DEFAULT_CADENCE_DAYS,
            force: bool = False,
    ) -> RotationReport:
        """Archive and purge aged files under the root (or 'path')."""
        return self._rotation.rotate(
            path=path,
            age_days=age_days,
            purge_days=purge_days,
            cadence_days=cadence_days,
            force=force,
        )

    # ------------------------------------------------------------------
    # PRIVATE HELPERS
    # ------------------------------------------------------------------

    def _echo(self, level: Level, line: str) -> None:
        self._host.log(_HOST_LEVELS[level], line)
