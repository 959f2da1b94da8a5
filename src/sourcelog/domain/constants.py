from __future__ import annotations

"""
Domain Constants.

Centralizes the naming conventions of the on-disk log layout and the
default thresholds used by routing and rotation.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# LOG LAYOUT
# -----------------------------------------------------------------------------

LOG_SUBDIR_NAME = "Logs"
DEFAULT_SOURCE = "General"
DEFAULT_DATE_PATTERN = "%Y%m%d"
LOG_EXTENSION = ".log"

DEFAULT_DEBUG_SUBDIR = "debug"
ALLOWED_DEBUG_SUBDIRS: Tuple[str, ...] = ("debug", "test")

DEFAULT_ARCHIVE_SUBDIR = "Archive"
ROTATION_LOG_PREFIX = "Backup-Logs"

# Fixed, locale-independent entry timestamp
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Messages starting with this token never trigger a target announcement
EXIT_TOKEN = "Exit"

# -----------------------------------------------------------------------------
# ROTATION DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_AGE_DAYS = 7
DEFAULT_PURGE_DAYS = 90
DEFAULT_CADENCE_DAYS = 10
DEFAULT_LAST_BACKUP_FALLBACK_DAYS = 30

# -----------------------------------------------------------------------------
# READER DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_TAIL_LINES = 10
DEFAULT_LIST_LIMIT = 10

# Filesystem types whose device string carries the remote root
NETWORK_FSTYPES: Tuple[str, ...] = ("cifs", "smbfs", "smb3", "nfs", "nfs4")
