from __future__ import annotations

"""
Bulk File Mover.

Moves every file of a directory that is older than a given number of days
into another directory, reporting per-file success or failure. Used by the
rotation manager as a single batch operation.
"""

import logging
import os
import shutil
from datetime import datetime
from typing import Protocol

from sourcelog.domain.errors import MoveError
from sourcelog.domain.models import MoveOutcome
from sourcelog.infra.fs import file_age_days, list_files, safe_mkdir

logger = logging.getLogger(__name__)


class FileMover(Protocol):
    """Capability moving aged files between directories."""

    def move_older_than(
            self,
            source_dir: str,
            dest_dir: str,
            min_age_days: int,
            now: datetime,
    ) -> MoveOutcome:
        ...


class ShutilFileMover:
    """
    Default mover built on shutil.move.

    Each failed file is retried 'retries' times before being reported as
    failed. Per-file activity is logged at DEBUG level only.

    Args:
        retries: Extra attempts per file after the first failure.
    """

    def __init__(self, retries: int = 1) -> None:
        self._retries = max(0, int(retries))

    def move_older_than(
            self,
            source_dir: str,
            dest_dir: str,
            min_age_days: int,
            now: datetime,
    ) -> MoveOutcome:
        """
        Move files directly under source_dir whose age is >= min_age_days.

        Args:
            source_dir: Directory scanned (not recursively).
            dest_dir: Destination directory, created when needed.
            min_age_days: Inclusive age threshold in whole days.
            now: Reference moment for age computation.

        Returns:
            MoveOutcome: Moved and failed source paths.
        """
        outcome = MoveOutcome()

        candidates = []
        for path in list_files(source_dir):
            try:
                if file_age_days(path, now) >= min_age_days:
                    candidates.append(path)
            except OSError as e:
                logger.debug(f"Cannot stat {path}: {e}")
                outcome.failed.append(path)

        if not candidates:
            return outcome

        ok, err = safe_mkdir(dest_dir)
        if not ok:
            logger.warning(f"Cannot create archive directory {dest_dir}: {err}")
            outcome.failed.extend(candidates)
            return outcome

        for path in candidates:
            try:
                self._move_with_retry(path, dest_dir)
                outcome.moved.append(path)
            except MoveError as e:
                logger.debug(str(e))
                outcome.failed.append(path)

        return outcome

    def _move_with_retry(self, path: str, dest_dir: str) -> None:
        """Move one file, replacing a same-named file in the destination."""
        destination = os.path.join(dest_dir, os.path.basename(path))
        last_error = ""
        for attempt in range(self._retries + 1):
            try:
                if os.path.exists(destination):
                    os.remove(destination)
                shutil.move(path, destination)
                logger.debug(f"Moved {path} -> {destination}")
                return
            except OSError as e:
                last_error = str(e)
                logger.debug(f"Move attempt {attempt + 1} failed for {path}: {e}")
        raise MoveError(path, last_error)
