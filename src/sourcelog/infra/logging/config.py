from __future__ import annotations

"""
Host Diagnostics Settings.

The per-source log files are written by LogWriter. Everything sourcelog says
about itself (target announcements, degraded-mode warnings, echoed entries
when nothing is persisted) goes through the standard 'logging' module
instead, configured from the settings below.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from sourcelog.domain.constants import TIMESTAMP_FORMAT

# Entry levels and standard level names accepted for the host threshold
_LEVEL_MAP: Dict[str, int] = {
    "VERBOSE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class HostLoggingConfig:
    """
    Immutable settings for the host diagnostics.

    Attributes:
        level: Threshold name; entry level names (Verbose) are accepted.
        console: Echo diagnostics to stderr.
        log_file: Optional diagnostics file, rolled over by size.
        max_bytes: Size of one diagnostics segment.
        backup_count: Rolled-over segments kept next to log_file.
        console_fmt: stderr record layout.
        file_fmt: Diagnostics file record layout.
        datefmt: Timestamp layout of file records, same as the log entries.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 2

    console_fmt: str = "sourcelog | %(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = TIMESTAMP_FORMAT

    @classmethod
    def for_cli(cls, debug: bool = False, diag_log: Optional[str] = None) -> "HostLoggingConfig":
        """Settings for a CLI run: stderr always, DEBUG on request, optional file."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=diag_log)
