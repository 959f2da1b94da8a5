from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for a fixed clock, a temporary log root and file ageing.
"""

import os
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def now() -> datetime:
    """Reference moment shared by the clock and the file-ageing helper."""
    return datetime.now().replace(microsecond=0)


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """Clock frozen at 'now'."""
    return lambda: now


@pytest.fixture
def log_root(tmp_path: Path) -> Path:
    """Existing, empty log root directory."""
    root = tmp_path / "Logs"
    root.mkdir()
    return root


@pytest.fixture
def age_file(now: datetime) -> Callable[..., Path]:
    """
    Return a helper creating a file whose mtime lies 'days' (+ 'hours') before 'now'.

    Returns:
        Callable[..., Path]: age_file(path, days, hours=1, content="x\\n").
    """
    def _age(path: Path, days: int, hours: int = 1, content: str = "x\n") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            path.write_text(content, encoding="utf-8")
        stamp = (now - timedelta(days=days, hours=hours)).timestamp()
        os.utime(path, (stamp, stamp))
        return path

    return _age
