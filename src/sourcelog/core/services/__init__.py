from __future__ import annotations

from .mover import FileMover, ShutilFileMover
from .path_resolver import PathResolver
from .reader import LogReader
from .rotation import RotationManager
from .router import LogRouter
from .writer import LogWriter

__all__ = [
    "FileMover",
    "ShutilFileMover",
    "PathResolver",
    "LogReader",
    "RotationManager",
    "LogRouter",
    "LogWriter",
]
