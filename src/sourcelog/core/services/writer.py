from __future__ import annotations

"""
Log Entry Writer.

Serializes one entry into a single physical line and appends it to the
routed file. Embedded line breaks and whitespace runs are flattened so the
on-disk format stays one entry per line.
"""

import logging
import os
import re
from datetime import datetime
from typing import Callable, Optional

from sourcelog.domain.constants import TIMESTAMP_FORMAT
from sourcelog.domain.errors import DirectoryCreateError, LogWriteError
from sourcelog.domain.models import Level, LogRecord
from sourcelog.infra.fs import safe_mkdir

logger = logging.getLogger(__name__)

_NEWLINES = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RUN = re.compile(r"\s{2,}")


def normalize_message(message: str) -> str:
    """
    Flatten a message to a single line.

    Args:
        message: Raw caller text.

    Returns:
        str: Text with newlines replaced by spaces and whitespace runs collapsed.
    """
    text = _NEWLINES.sub(" ", message or "")
    return _WHITESPACE_RUN.sub(" ", text)


def format_record(record: LogRecord) -> str:
    """Render a record as '<timestamp> [LEVEL] <message>' (tag omitted for Info)."""
    stamp = record.timestamp.strftime(TIMESTAMP_FORMAT)
    text = normalize_message(record.message)
    if record.level is Level.INFO:
        return f"{stamp} {text}"
    return f"{stamp} [{record.level.tag}] {text}"


def ensure_parent_dir(path: str) -> None:
    """
    Create the parent directory of a file recursively.

    Raises:
        DirectoryCreateError: If the directory cannot be created.
    """
    parent = os.path.dirname(os.path.abspath(path))
    ok, err = safe_mkdir(parent)
    if not ok:
        raise DirectoryCreateError(parent, err)


class LogWriter:
    """
    Append formatted entries to log files.

    Args:
        clock: Callable returning the current moment (injectable for tests).
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or datetime.now

    def format_line(
            self,
            level: Level,
            message: str,
            timestamp: Optional[datetime] = None,
            source: str = "",
    ) -> str:
        """Build the single-line representation of an entry."""
        record = LogRecord(
            timestamp=timestamp or self._clock(),
            level=level,
            source=source,
            message=message,
        )
        return format_record(record)

    def write(
            self,
            target_file: str,
            level: Level,
            message: str,
            ensure_dir: bool = True,
            passthrough: bool = False,
    ) -> Optional[str]:
        """
        Append one entry to a log file.

        Directory creation is best-effort: a failure is logged as a warning
        and the append is still attempted.

        Args:
            target_file: Routed log file.
            level: Entry severity.
            message: Raw caller text.
            ensure_dir: Create the parent directory before writing.
            passthrough: Hand the formatted line back to the caller.

        Returns:
            Optional[str]: The formatted line when passthrough is requested.

        Raises:
            LogWriteError: If the append fails.
        """
        line = self.format_line(level, message)
        self.append_line(target_file, line, ensure_dir=ensure_dir)
        return line if passthrough else None

    def append_line(self, target_file: str, line: str, ensure_dir: bool = True) -> None:
        """
        Append an already formatted line.

        Unencodable text (lone surrogates) and unusable paths (embedded NUL)
        are reported as LogWriteError like any I/O failure.

        Raises:
            LogWriteError: If the append fails.
        """
        if ensure_dir:
            try:
                ensure_parent_dir(target_file)
            except DirectoryCreateError as e:
                logger.warning(str(e))

        try:
            with open(target_file, "a", encoding="utf-8") as out:
                out.write(f"{line}\n")
        except (OSError, UnicodeError, ValueError) as e:
            raise LogWriteError(target_file, str(e)) from e
