from __future__ import annotations

"""
Log Routing Service.

Decides which file and stream a message belongs to and whether the caller
should announce the target. The router owns its RouteState, so several
independent routers can coexist in one process.
"""

import logging
import os
import re
from datetime import datetime
from typing import Callable, Optional

from sourcelog.domain.constants import DEFAULT_SOURCE, EXIT_TOKEN, LOG_EXTENSION
from sourcelog.domain.models import Level, LoggingConfig, RouteResult, RouteState, Stream

logger = logging.getLogger(__name__)

_PATH_SEPARATORS = re.compile(r"[\\/]")


def normalize_source(source: Optional[str]) -> str:
    """
    Reduce a caller-provided source to a logical name.

    Blank values fall back to the default source. Values that look like a
    path are reduced to their final segment, cut before the first dot, so
    'C:\\scripts\\deploy.task.ps1' becomes 'deploy'.

    Args:
        source: Raw source name or path.

    Returns:
        str: Logical source name.
    """
    name = (source or "").strip()
    if not name:
        return DEFAULT_SOURCE

    if _PATH_SEPARATORS.search(name):
        segments = [s for s in _PATH_SEPARATORS.split(name) if s]
        if not segments:
            return DEFAULT_SOURCE
        name = segments[-1].split(".", 1)[0] or DEFAULT_SOURCE

    return name


def log_file_name(source: str, stamp: str) -> str:
    """Build the '<source>_<stamp>.log' file name."""
    return f"{source}_{stamp}{LOG_EXTENSION}"


class LogRouter:
    """
    Route messages to per-source, per-day log files.

    Args:
        config: Session configuration.
        clock: Callable returning the current moment (injectable for tests).
    """

    def __init__(
            self,
            config: LoggingConfig,
            clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._config = config
        self._clock = clock or datetime.now
        self._state = RouteState()

    @property
    def config(self) -> LoggingConfig:
        return self._config

    @property
    def state(self) -> RouteState:
        return self._state

    def reset(self) -> None:
        """Forget the last source so the next message announces again."""
        self._state = RouteState()

    def target_for(self, source: str, diagnostic: bool = False) -> Optional[str]:
        """
        Compute the log file for a normalized source on the current day.

        Args:
            source: Normalized source name.
            diagnostic: Place the file under the debug subdirectory.

        Returns:
            Optional[str]: Absolute path, or None when no root is configured.
        """
        root = self._config.root_path
        if not root:
            return None
        stamp = self._clock().strftime(self._config.date_pattern)
        directory = os.path.join(root, self._config.debug_subdir) if diagnostic else root
        return os.path.join(directory, log_file_name(source, stamp))

    def route(
            self,
            message: str,
            source: Optional[str] = None,
            explicit_path: Optional[str] = None,
            level: Level = Level.INFO,
            diagnostic: bool = False,
    ) -> RouteResult:
        """
        Resolve target file, stream and announcement for one message.

        A change of source announces the target once; consecutive messages
        from the same source stay silent. Messages beginning with 'Exit'
        never announce. Without a root the result carries no file target
        and the degraded condition announces once per router.

        Args:
            message: Message text.
            source: Logical source name or a script path.
            explicit_path: Overrides the computed target file.
            level: Caller-supplied severity.
            diagnostic: Route into the debug subdirectory.

        Returns:
            RouteResult: Routing decision.
        """
        name = normalize_source(source)
        stream = Stream.for_level(level)
        state = self._state

        if explicit_path and explicit_path.strip():
            target: Optional[str] = os.path.abspath(os.path.expanduser(explicit_path.strip()))
        else:
            target = self.target_for(name, diagnostic)

        if target is None:
            announce = not state.degraded_announced
            state.degraded_announced = True
            state.last_source = name
            return RouteResult(
                target_file=None,
                stream=stream,
                announce=announce,
                source=name,
                persist=False,
            )

        announce = False
        if name != state.last_source:
            logger.debug(f"Route change: '{state.last_source}' -> '{name}'")
            state.last_source = name
            state.intro_pending = True
            announce = True

        if (message or "").startswith(EXIT_TOKEN):
            announce = False

        return RouteResult(
            target_file=target,
            stream=stream,
            announce=announce,
            source=name,
            persist=self._config.enabled,
        )
