from __future__ import annotations

"""
Unit tests for the Log Reader.

Verifies:
1. Selection of the newest file for a source filter.
2. Tail extraction, metadata-only reads and short files.
3. Deterministic tie-breaking and recent-file enumeration.
4. Not-found reporting as a warning.
"""

import logging
import os

import pytest

from sourcelog.core.services.reader import LogReader
from sourcelog.domain.errors import LogNotFoundError


def _write_lines(path, count):
    path.write_text("".join(f"line {i}\n" for i in range(1, count + 1)), encoding="utf-8")
    return path


@pytest.fixture
def populated_root(log_root, age_file):
    deploy = _write_lines(log_root / "Deploy_20240101.log", 8)
    build = _write_lines(log_root / "Build_20240102.log", 3)
    age_file(deploy, days=2)
    age_file(build, days=1)
    (log_root / "Archive").mkdir()
    return log_root


def test_read_latest_filters_by_source(populated_root):
    """Scenario: the Deploy filter ignores the newer Build file."""
    result = LogReader(str(populated_root)).read_latest("Deploy", line_count=5)

    assert result.found
    assert result.file_info.name == "Deploy_20240101.log"
    assert result.tail_lines == ["line 4", "line 5", "line 6", "line 7", "line 8"]


def test_read_latest_empty_filter_takes_newest(populated_root):
    result = LogReader(str(populated_root)).read_latest("", line_count=10)

    assert result.file_info.name == "Build_20240102.log"
    assert result.tail_lines == ["line 1", "line 2", "line 3"]


def test_read_latest_zero_lines_returns_metadata_only(populated_root):
    result = LogReader(str(populated_root)).read_latest("Deploy", line_count=0)

    assert result.found
    assert result.tail_lines == []
    assert result.file_info.size == os.path.getsize(populated_root / "Deploy_20240101.log")


def test_read_latest_not_found_is_warning(populated_root, caplog):
    caplog.set_level(logging.WARNING, logger="sourcelog.core.services.reader")

    result = LogReader(str(populated_root)).read_latest("Missing")

    assert not result.found
    assert result.tail_lines == []
    assert "Missing" in caplog.text


def test_find_latest_raises_not_found(tmp_path):
    with pytest.raises(LogNotFoundError):
        LogReader(str(tmp_path / "absent")).find_latest("")


def test_tie_break_is_alphabetical(log_root, age_file):
    b = age_file(log_root / "B_20240101.log", days=1)
    a = age_file(log_root / "A_20240101.log", days=1)
    stamp = os.path.getmtime(b)
    os.utime(a, (stamp, stamp))

    assert LogReader(str(log_root)).find_latest("").name == "A_20240101.log"


def test_list_recent_orders_newest_first_and_limits(log_root, age_file):
    for days, name in [(3, "Old_1.log"), (1, "New_1.log"), (2, "Mid_1.log")]:
        age_file(log_root / name, days=days)
    (log_root / "debug").mkdir()

    reader = LogReader(str(log_root))

    assert [f.name for f in reader.list_recent()] == ["New_1.log", "Mid_1.log", "Old_1.log"]
    assert [f.name for f in reader.list_recent(limit=2)] == ["New_1.log", "Mid_1.log"]
    assert [f.name for f in reader.list_recent("Old")] == ["Old_1.log"]
