from __future__ import annotations

"""
Log Discovery and Tail Service.

Locates the most recently modified log file for an optional source filter
and returns its tail, or enumerates the newest files under the log root.
"""

import logging
import os
from collections import deque
from typing import List

from sourcelog.domain.constants import DEFAULT_LIST_LIMIT, DEFAULT_TAIL_LINES
from sourcelog.domain.errors import LogNotFoundError
from sourcelog.domain.models import LogFileInfo, ReadResult
from sourcelog.infra.fs import get_modified_time, list_files

logger = logging.getLogger(__name__)


class LogReader:
    """
    Read recent log files under a root directory.

    Args:
        root_path: Directory scanned (not recursively) for log files.
    """

    def __init__(self, root_path: str) -> None:
        self._root = root_path

    @property
    def root_path(self) -> str:
        return self._root

    def list_recent(self, source_filter: str = "", limit: int = DEFAULT_LIST_LIMIT) -> List[LogFileInfo]:
        """
        Enumerate matching files, newest first.

        Ties on modification time are broken by file name so the order is
        deterministic.

        Args:
            source_filter: Substring the file name must contain; empty matches all.
            limit: Maximum number of entries; values below 1 return everything.

        Returns:
            List[LogFileInfo]: Matching files ordered by recency.
        """
        needle = source_filter or ""
        infos: List[LogFileInfo] = []

        for path in list_files(self._root):
            name = os.path.basename(path)
            if needle not in name:
                continue
            try:
                infos.append(LogFileInfo(
                    name=name,
                    path=path,
                    modified=get_modified_time(path),
                    size=os.path.getsize(path),
                ))
            except OSError as e:
                logger.debug(f"Skipping unreadable log file {path}: {e}")

        infos.sort(key=lambda i: (-i.modified.timestamp(), i.name))
        if limit and limit > 0:
            return infos[:limit]
        return infos

    def find_latest(self, source_filter: str = "") -> LogFileInfo:
        """
        Select the newest matching file.

        Raises:
            LogNotFoundError: If no file matches.
        """
        matches = self.list_recent(source_filter, limit=1)
        if not matches:
            raise LogNotFoundError(self._root, source_filter)
        return matches[0]

    def read_latest(self, source_filter: str = "", line_count: int = DEFAULT_TAIL_LINES) -> ReadResult:
        """
        Return metadata and tail of the newest matching log file.

        A missing match is reported as a warning and yields an empty result.

        Args:
            source_filter: Substring the file name must contain.
            line_count: Lines to return from the end; 0 returns metadata only.

        Returns:
            ReadResult: File metadata and tail lines (without line terminators).
        """
        try:
            info = self.find_latest(source_filter)
        except LogNotFoundError as e:
            logger.warning(str(e))
            return ReadResult(file_info=None)

        if line_count <= 0:
            return ReadResult(file_info=info)

        try:
            lines = tail_file(info.path, line_count)
        except OSError as e:
            logger.warning(f"Unable to read {info.path}: {e}")
            return ReadResult(file_info=info)

        return ReadResult(file_info=info, tail_lines=lines)


def tail_file(path: str, line_count: int) -> List[str]:
    """
    Read the last lines of a text file.

    Args:
        path: File to read.
        line_count: Maximum number of lines.

    Returns:
        List[str]: Up to line_count lines, oldest first, without newlines.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        tail = deque((line.rstrip("\r\n") for line in f), maxlen=line_count)
    return list(tail)
