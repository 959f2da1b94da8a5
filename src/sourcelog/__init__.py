from __future__ import annotations

"""
sourcelog: per-source log routing, tailing and age-based rotation.
"""

from sourcelog.core.session import LogSession
from sourcelog.domain.models import Level, LoggingConfig, Preference

__version__ = "0.1.0"

__all__ = [
    "LogSession",
    "LoggingConfig",
    "Level",
    "Preference",
    "__version__",
]
