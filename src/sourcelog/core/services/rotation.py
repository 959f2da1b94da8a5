from __future__ import annotations

"""
Log Rotation Service.

Moves aged log files into an archive subdirectory and purges over-aged
archive files. A cadence gate, derived from the newest file in the archive,
keeps the filesystem work from running on every invocation.

Every executed rotation appends to 'Backup-Logs_<date>.log' inside the
archive, so that file doubles as the last-rotation marker even when nothing
was moved.
"""

import logging
import os
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from sourcelog.core.services.mover import FileMover, ShutilFileMover
from sourcelog.core.services.router import log_file_name
from sourcelog.core.services.writer import LogWriter
from sourcelog.domain.constants import (
    DEFAULT_AGE_DAYS,
    DEFAULT_CADENCE_DAYS,
    DEFAULT_DATE_PATTERN,
    DEFAULT_LAST_BACKUP_FALLBACK_DAYS,
    DEFAULT_PURGE_DAYS,
    ROTATION_LOG_PREFIX,
)
from sourcelog.domain.errors import DeleteError, LogWriteError
from sourcelog.domain.models import Level, LoggingConfig, RotationReport
from sourcelog.infra.fs import file_age_days, get_modified_time, list_files

logger = logging.getLogger(__name__)


class RotationManager:
    """
    Archive and purge log files by age.

    Args:
        config: Session configuration (root and archive subdirectory).
        mover: Bulk file mover capability.
        clock: Callable returning the current moment (injectable for tests).
    """

    def __init__(
            self,
            config: LoggingConfig,
            mover: Optional[FileMover] = None,
            clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._config = config
        self._mover = mover or ShutilFileMover()
        self._clock = clock or datetime.now
        self._writer = LogWriter(clock=self._clock)

    def archive_dir(self, path: str) -> str:
        return os.path.join(path, self._config.archive_subdir)

    def last_backup(self, archive: str) -> Optional[datetime]:
        """Newest modification time among archived files, or None if the archive is empty."""
        stamps: List[datetime] = []
        for p in list_files(archive):
            try:
                stamps.append(get_modified_time(p))
            except OSError as e:
                logger.debug(f"Cannot stat {p}: {e}")
        return max(stamps) if stamps else None

    def rotate(
            self,
            path: Optional[str] = None,
            age_days: int = DEFAULT_AGE_DAYS,
            purge_days: int = DEFAULT_PURGE_DAYS,
            cadence_days: int = DEFAULT_CADENCE_DAYS,
            force: bool = False,
    ) -> RotationReport:
        """
        Run the cadence gate and, when due or forced, archive and purge.

        Args:
            path: Log directory to rotate; defaults to the configured root.
            age_days: Files at least this many whole days old are archived.
            purge_days: Archived files at least this many days old are deleted.
            cadence_days: Minimum interval between executed rotations.
            force: Bypass the cadence gate.

        Returns:
            RotationReport: Aggregate counts; individual failures are not itemized.
        """
        target = path or self._config.root_path
        if not target or not os.path.isdir(target):
            logger.warning(f"Rotation skipped, log directory missing: {target}")
            return RotationReport(executed=False, reason="path missing")

        now = self._clock()
        archive = self.archive_dir(target)

        # 1. Gate
        marker = self.last_backup(archive)
        if marker is None:
            last_backup = now - timedelta(days=DEFAULT_LAST_BACKUP_FALLBACK_DAYS)
            next_due = last_backup + timedelta(days=cadence_days)
            due = True
        else:
            last_backup = marker
            next_due = last_backup + timedelta(days=cadence_days)
            due = now >= next_due

        if not due and not force:
            logger.debug(f"Rotation not due until {next_due:%Y-%m-%d %H:%M:%S}")
            return RotationReport(
                executed=False,
                reason="not due",
                last_backup=last_backup,
                next_due=next_due,
            )

        # 2. Execute
        outcome = self._mover.move_older_than(target, archive, age_days, now)
        rotation_log = os.path.join(
            archive, log_file_name(ROTATION_LOG_PREFIX, now.strftime(DEFAULT_DATE_PATTERN))
        )
        purged, delete_failures = self._purge(archive, purge_days, now, keep=rotation_log)

        lines = [f"Archived {os.path.basename(p)}" for p in outcome.moved]
        lines += [f"Failed to archive {os.path.basename(p)}" for p in outcome.failed]
        lines.append(
            f"Rotation of {target}: moved {len(outcome.moved)}, purged {purged}, "
            f"move failures {len(outcome.failed)}, delete failures {delete_failures}"
        )
        self._record(rotation_log, lines)

        logger.info(
            f"Rotated {target}: {len(outcome.moved)} archived, {purged} purged"
        )

        return RotationReport(
            executed=True,
            reason="forced" if force and not due else "due",
            last_backup=last_backup,
            next_due=now + timedelta(days=cadence_days),
            moved=len(outcome.moved),
            purged=purged,
            move_failures=len(outcome.failed),
            delete_failures=delete_failures,
        )

    # ------------------------------------------------------------------
    # PRIVATE HELPERS
    # ------------------------------------------------------------------

    def _purge(self, archive: str, purge_days: int, now: datetime, keep: str) -> Tuple[int, int]:
        """Delete archived files aged >= purge_days; return (purged, failures)."""
        purged = 0
        failures = 0
        keep_abs = os.path.abspath(keep)

        for p in list_files(archive):
            if p == keep_abs:
                continue
            try:
                if file_age_days(p, now) < purge_days:
                    continue
                _delete(p)
                purged += 1
            except (OSError, DeleteError) as e:
                logger.debug(str(e))
                failures += 1

        return purged, failures

    def _record(self, rotation_log: str, lines: List[str]) -> None:
        for i, line in enumerate(lines):
            try:
                self._writer.write(rotation_log, Level.INFO, line, ensure_dir=(i == 0))
            except LogWriteError as e:
                logger.warning(str(e))
                return


def _delete(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        raise DeleteError(path, str(e)) from e
