from __future__ import annotations

"""
Log Root Resolution Service.

Derives the platform-appropriate log root directory. Roots reported in UNC
form (a mapped network drive surfaced as its full remote path) are
rewritten to the locally mounted drive serving that same share.
"""

import logging
import os
from typing import Callable, List, Optional

from sourcelog.domain.constants import LOG_SUBDIR_NAME
from sourcelog.domain.errors import PathResolutionError
from sourcelog.infra.fs import (
    MountedDrive,
    get_documents_dir,
    list_mounted_drives,
    normalize_path,
    split_unc_root,
    unc_key,
)

logger = logging.getLogger(__name__)

DriveProvider = Callable[[], List[MountedDrive]]
DocumentsProvider = Callable[[], Optional[str]]


class PathResolver:
    """
    Resolve the log root for the current user.

    Args:
        drive_provider: Callable listing mounted network drives.
        documents_provider: Callable returning the documents directory.
        subdir: Fixed subdirectory appended to the documents directory.
    """

    def __init__(
            self,
            drive_provider: Optional[DriveProvider] = None,
            documents_provider: Optional[DocumentsProvider] = None,
            subdir: str = LOG_SUBDIR_NAME,
    ) -> None:
        self._drive_provider = drive_provider or list_mounted_drives
        self._documents_provider = documents_provider or get_documents_dir
        self._subdir = subdir

    def resolve(self, override_path: Optional[str] = None) -> str:
        """
        Determine the log root directory.

        Args:
            override_path: Explicit root; used as-is (normalized) when not blank.

        Returns:
            str: Absolute log root, with UNC prefixes mapped to local drives.

        Raises:
            PathResolutionError: If no root can be determined.
        """
        if override_path and override_path.strip():
            root = normalize_path(override_path, fallback=override_path)
        else:
            docs = self._documents_provider()
            if not docs:
                raise PathResolutionError("Unable to determine the user's documents directory.")
            root = os.path.join(docs, self._subdir)

        return self.map_unc(root)

    def try_resolve(self, override_path: Optional[str] = None) -> Optional[str]:
        """Resolve the root, returning None on failure (the session warns on first use)."""
        try:
            return self.resolve(override_path)
        except PathResolutionError as e:
            logger.debug(f"Log root unavailable, continuing with host output only: {e}")
            return None

    def map_unc(self, path: str) -> str:
        """
        Rewrite a UNC path to the local mount point of the same share.

        Args:
            path: Candidate path.

        Returns:
            str: The mapped path, or the input unchanged if it is not UNC or
                 no mounted drive serves its share.
        """
        split = split_unc_root(path)
        if split is None:
            return path

        unc_root, rest = split
        key = unc_key(unc_root)

        for drive in self._drive_provider():
            if unc_key(drive.remote_root) == key:
                parts = [p for p in rest.split("\\") if p]
                mapped = os.path.join(drive.mount_point, *parts) if parts else drive.mount_point
                logger.debug(f"Mapped UNC root {unc_root} to {drive.mount_point}")
                return mapped

        return path
