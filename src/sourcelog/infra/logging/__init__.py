from __future__ import annotations

from .config import HostLoggingConfig
from .core import (
    configure_logging,
    get_logger,
    shutdown_logging,
)

__all__ = [
    "HostLoggingConfig",
    "configure_logging",
    "get_logger",
    "shutdown_logging",
]
