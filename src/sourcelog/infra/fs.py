from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, mounted-drive discovery and
file-age helpers. Acts as an abstraction over the 'os' module and 'psutil'
so that the services behave uniformly on Windows and Unix-like systems.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

import psutil

from sourcelog.domain.constants import NETWORK_FSTYPES

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86400

# -----------------------------------------------------------------------------
# DATA STRUCTURES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MountedDrive:
    """
    A locally mounted filesystem backed by a remote share.

    Attributes:
        mount_point: Local access path (e.g. 'Z:\\' or '/mnt/share').
        remote_root: UNC root of the share (e.g. '\\\\server\\share').
    """
    mount_point: str
    remote_root: str

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_documents_dir() -> Optional[str]:
    """
    Resolve the user's documents directory.

    Standards:
    - Windows: %USERPROFILE%/Documents
    - Linux/Mac: $XDG_DOCUMENTS_DIR or ~/Documents

    Returns:
        Optional[str]: Absolute path, or None if no home can be determined.
    """
    if os.name == "nt":
        base = os.environ.get("USERPROFILE")
        if base:
            return os.path.abspath(os.path.join(base, "Documents"))

    xdg = os.environ.get("XDG_DOCUMENTS_DIR")
    if xdg:
        return os.path.abspath(os.path.expandvars(os.path.expanduser(xdg)))

    home = os.path.expanduser("~")
    if not home or home == "~":
        return None
    return os.path.abspath(os.path.join(home, "Documents"))


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    if is_unc_path(p):
        return p
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# UNC / MAPPED DRIVE API
# -----------------------------------------------------------------------------

def is_unc_path(path: str) -> bool:
    """Check whether a path is written in UNC form (\\\\server\\share or //server/share)."""
    p = (path or "").replace("/", "\\")
    return p.startswith("\\\\") and not p.startswith("\\\\?\\") and not p.startswith("\\\\.\\")


def split_unc_root(path: str) -> Optional[Tuple[str, str]]:
    """
    Split a UNC path into its share root and the remaining relative part.

    Args:
        path: UNC path.

    Returns:
        Optional[Tuple[str, str]]: ('\\\\server\\share', 'rest\\of\\path'), or None.
    """
    if not is_unc_path(path):
        return None
    parts = [x for x in path.replace("/", "\\").split("\\") if x]
    if len(parts) < 2:
        return None
    root = "\\\\" + "\\".join(parts[:2])
    rest = "\\".join(parts[2:])
    return root, rest


def unc_key(path: str) -> str:
    """Canonical comparison key for a UNC root (separators unified, case-folded)."""
    return path.replace("/", "\\").rstrip("\\").casefold()


def list_mounted_drives() -> List[MountedDrive]:
    """
    Enumerate mounted filesystems that are backed by a remote share.

    On Windows, a mapped drive letter resolves to its UNC root through
    os.path.realpath. On POSIX, network mounts report the share in their
    device field (e.g. '//server/share' for CIFS).

    Returns:
        List[MountedDrive]: Mounted drives with a known remote root.
    """
    drives: List[MountedDrive] = []
    try:
        partitions = psutil.disk_partitions(all=True)
    except (OSError, RuntimeError) as e:
        logger.warning(f"Mounted drive enumeration failed: {e}")
        return drives

    for part in partitions:
        remote = ""
        if os.name == "nt":
            try:
                resolved = os.path.realpath(part.mountpoint)
            except OSError:
                continue
            if resolved.startswith("\\\\?\\UNC\\"):
                resolved = "\\\\" + resolved[len("\\\\?\\UNC\\"):]
            if is_unc_path(resolved):
                remote = resolved
        elif part.fstype.lower() in NETWORK_FSTYPES:
            remote = part.device

        if remote:
            drives.append(MountedDrive(mount_point=part.mountpoint, remote_root=remote))

    return drives

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except (OSError, ValueError) as e:
        return False, str(e)


def get_modified_time(path: str) -> datetime:
    """Return the last-modified timestamp of a file as a naive local datetime."""
    return datetime.fromtimestamp(os.path.getmtime(path))


def file_age_days(path: str, now: datetime) -> int:
    """
    Compute the age of a file in whole days.

    Args:
        path: Target file.
        now: Reference moment.

    Returns:
        int: floor((now - mtime) / 1 day).
    """
    delta = now - get_modified_time(path)
    return int(delta.total_seconds() // _SECONDS_PER_DAY)


def list_files(directory: str) -> List[str]:
    """
    List regular files directly under a directory, sorted by name.

    An unreadable directory is logged as a warning and treated as empty.

    Args:
        directory: Directory to inspect.

    Returns:
        List[str]: Absolute file paths; empty if the directory is missing.
    """
    if not os.path.isdir(directory):
        return []
    out: List[str] = []
    try:
        with os.scandir(directory) as it:
            for entry in it:
                if entry.is_file():
                    out.append(os.path.abspath(entry.path))
    except OSError as e:
        logger.warning(f"Cannot list directory '{directory}': {e}")
        return []
    out.sort()
    return out
