from __future__ import annotations

"""
Integration tests for Host Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
persistence of diagnostics to file and clean shutdown.
"""

import logging
from logging.handlers import QueueListener
from pathlib import Path

import pytest

from sourcelog.infra.logging import HostLoggingConfig, configure_logging, shutdown_logging
from sourcelog.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from sourcelog.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging():
    """Clean up our root logger handlers before and after each test."""
    root = logging.getLogger()
    previous_level = root.level

    shutdown_logging()
    yield
    shutdown_logging()

    root.setLevel(previous_level)


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = HostLoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_diagnostics_file_receives_records(tmp_path: Path) -> None:
    """TC-02: Verify records reach the diagnostics file once the listener is flushed."""
    diag = tmp_path / "diag" / "sourcelog.diag.log"
    configure_logging(HostLoggingConfig(level="DEBUG", console=False, log_file=str(diag)))

    logging.getLogger("sourcelog.test").info("persisted diagnostic")

    # Stopping the listener drains the queue
    shutdown_logging()

    content = diag.read_text(encoding="utf-8")
    assert "persisted diagnostic" in content
    assert "sourcelog.test" in content


def test_queue_listener_architecture() -> None:
    """TC-03: Verify that the root logger uses a QueueHandler-based architecture."""
    configure_logging(HostLoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    ours = [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    assert len(ours) == 1
    assert isinstance(getattr(root, _QUEUE_LISTENER_ATTR), QueueListener)


def test_force_reconfigures_level() -> None:
    configure_logging(HostLoggingConfig(level="INFO"))
    configure_logging(HostLoggingConfig(level="DEBUG"), force=True)
    assert logging.getLogger().level == logging.DEBUG


def test_shutdown_clears_state() -> None:
    configure_logging(HostLoggingConfig(level="INFO"))
    shutdown_logging()

    root = logging.getLogger()
    assert not any(getattr(h, _HANDLER_TAG_ATTR, False) for h in root.handlers)
    assert getattr(root, _QUEUE_LISTENER_ATTR, None) is None
    assert not hasattr(root, _CONFIGURED_FLAG_ATTR)


def test_cli_settings_map_flags() -> None:
    quiet = HostLoggingConfig.for_cli()
    loud = HostLoggingConfig.for_cli(debug=True, diag_log="/tmp/diag.log")

    assert (quiet.level, quiet.console, quiet.log_file) == ("INFO", True, None)
    assert (loud.level, loud.log_file) == ("DEBUG", "/tmp/diag.log")


def test_verbose_threshold_maps_to_debug() -> None:
    configure_logging(HostLoggingConfig(level="Verbose", console=True))

    assert logging.getLogger().level == logging.DEBUG
