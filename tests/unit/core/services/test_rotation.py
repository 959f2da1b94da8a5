from __future__ import annotations

"""
Unit tests for the Rotation Manager.

Verifies:
1. Cadence gate (empty archive is always due; recent marker skips).
2. Inclusive age threshold for archival.
3. Purge of over-aged archive files and swallowed delete failures.
4. Idempotence within the cadence window and the force override.
5. Rotation report log inside the archive.
"""

import os
from datetime import datetime
from unittest.mock import patch

import pytest

from sourcelog.core.services.rotation import RotationManager
from sourcelog.domain.models import LoggingConfig, MoveOutcome


@pytest.fixture
def manager(log_root, clock) -> RotationManager:
    return RotationManager(LoggingConfig(root_path=str(log_root)), clock=clock)


def _rotation_log(log_root, now: datetime):
    return log_root / "Archive" / f"Backup-Logs_{now:%Y%m%d}.log"


class RecordingMover:
    """Mover double returning a canned outcome."""

    def __init__(self, outcome: MoveOutcome) -> None:
        self.outcome = outcome
        self.calls = []

    def move_older_than(self, source_dir, dest_dir, min_age_days, now):
        self.calls.append((source_dir, dest_dir, min_age_days, now))
        return self.outcome


# -----------------------------------------------------------------------------
# Gate
# -----------------------------------------------------------------------------

def test_empty_archive_always_executes(manager, log_root, age_file):
    age_file(log_root / "Deploy_old.log", days=8)

    report = manager.rotate(age_days=7, purge_days=90, cadence_days=10)

    assert report.executed is True
    assert report.moved == 1
    assert (log_root / "Archive" / "Deploy_old.log").exists()
    assert not (log_root / "Deploy_old.log").exists()


def test_empty_archive_is_due_even_with_long_cadence(manager):
    report = manager.rotate(cadence_days=365)
    assert report.executed is True


def test_recent_marker_skips_rotation(manager, log_root, age_file):
    age_file(log_root / "Archive" / "earlier.log", days=5)
    age_file(log_root / "Deploy_old.log", days=20)

    report = manager.rotate(cadence_days=10)

    assert report.executed is False
    assert report.reason == "not due"
    assert report.total_operations == 0
    assert (log_root / "Deploy_old.log").exists()


def test_stale_marker_triggers_rotation(manager, log_root, age_file):
    age_file(log_root / "Archive" / "earlier.log", days=11)

    assert manager.rotate(cadence_days=10).executed is True


def test_missing_path_reports_without_error(tmp_path, clock):
    mgr = RotationManager(LoggingConfig(root_path=str(tmp_path / "nope")), clock=clock)
    report = mgr.rotate()
    assert report.executed is False
    assert report.reason == "path missing"


# -----------------------------------------------------------------------------
# Age Threshold
# -----------------------------------------------------------------------------

def test_age_threshold_is_inclusive(manager, log_root, age_file):
    age_file(log_root / "exact.log", days=7)
    age_file(log_root / "younger.log", days=6)
    age_file(log_root / "almost.log", days=6, hours=23)

    report = manager.rotate(age_days=7)

    archive = log_root / "Archive"
    assert report.moved == 1
    assert (archive / "exact.log").exists()
    assert (log_root / "younger.log").exists()
    assert (log_root / "almost.log").exists()


def test_subdirectories_are_not_rotated(manager, log_root, age_file):
    age_file(log_root / "debug" / "trace.log", days=30)

    report = manager.rotate()

    assert report.moved == 0
    assert (log_root / "debug" / "trace.log").exists()


# -----------------------------------------------------------------------------
# Purge
# -----------------------------------------------------------------------------

def test_purge_removes_over_aged_archive_files(manager, log_root, age_file):
    archive = log_root / "Archive"
    age_file(archive / "ancient.log", days=91)
    age_file(archive / "kept.log", days=89)

    report = manager.rotate(purge_days=90, cadence_days=10)

    assert report.executed is True
    assert report.purged == 1
    assert not (archive / "ancient.log").exists()
    assert (archive / "kept.log").exists()


def test_delete_failures_are_swallowed(manager, log_root, age_file):
    age_file(log_root / "Archive" / "locked.log", days=120)

    with patch("os.remove", side_effect=PermissionError("locked")):
        report = manager.rotate(purge_days=90)

    assert report.executed is True
    assert report.purged == 0
    assert report.delete_failures == 1


# -----------------------------------------------------------------------------
# Idempotence & Force
# -----------------------------------------------------------------------------

def test_second_rotation_within_cadence_is_noop(manager, log_root, age_file):
    age_file(log_root / "a.log", days=8)
    first = manager.rotate()

    age_file(log_root / "b.log", days=8)
    second = manager.rotate()

    assert first.executed is True
    assert second.executed is False
    assert second.total_operations == 0
    assert (log_root / "b.log").exists()


def test_force_bypasses_gate(manager, log_root, age_file):
    age_file(log_root / "a.log", days=8)
    manager.rotate()

    age_file(log_root / "b.log", days=8)
    forced = manager.rotate(force=True)

    assert forced.executed is True
    assert forced.reason == "forced"
    assert forced.moved == 1


# -----------------------------------------------------------------------------
# Mover Integration & Reporting
# -----------------------------------------------------------------------------

def test_rotation_log_records_outcome(manager, log_root, age_file, now):
    age_file(log_root / "Deploy_old.log", days=8)

    manager.rotate()

    content = _rotation_log(log_root, now).read_text(encoding="utf-8")
    assert "Archived Deploy_old.log" in content
    assert "moved 1, purged 0" in content


def test_move_failures_are_counted(log_root, clock, now):
    mover = RecordingMover(MoveOutcome(moved=["x"], failed=["y", "z"]))
    mgr = RotationManager(LoggingConfig(root_path=str(log_root)), mover=mover, clock=clock)

    report = mgr.rotate(age_days=3)

    assert report.moved == 1
    assert report.move_failures == 2
    assert mover.calls == [(str(log_root), os.path.join(str(log_root), "Archive"), 3, now)]
