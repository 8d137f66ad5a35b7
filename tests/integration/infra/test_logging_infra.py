from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, log file rotation and that records emitted by scan
worker threads reach the file sink.
"""

import logging
from logging.handlers import QueueListener
from pathlib import Path

import pytest

from dirstat.core.services.scanner import scan
from dirstat.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
)


def _reset_root() -> None:
    root = logging.getLogger()

    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener and isinstance(listener, QueueListener) and listener._thread is not None:
        listener.stop()
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG_ATTR, False):
            root.removeHandler(h)
            h.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


@pytest.fixture(autouse=True)
def reset_logging():
    """Clean up root logger handlers before and after each test."""
    _reset_root()
    yield
    _reset_root()


def _drain() -> None:
    listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)
    listener.stop()


def test_logging_idempotency() -> None:
    """TC-01: Multiple configuration calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_force_reconfigure_replaces_listener() -> None:
    """TC-02: force=True tears down the previous chain."""
    configure_logging(LoggingConfig(level="INFO", console=True))
    root = logging.getLogger()
    first = getattr(root, _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG", console=True), force=True)

    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first
    assert len([h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]) == 1
    assert root.level == logging.DEBUG


def test_log_rotation(tmp_path: Path) -> None:
    """TC-03: File rotation happens when the size limit is exceeded."""
    log_file = tmp_path / "test_rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")

    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    _drain()

    assert log_file.exists()
    assert (tmp_path / "test_rotate.log.1").exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """TC-04: The root logger uses a QueueHandler-based architecture."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    queue_handlers = [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    assert len(queue_handlers) > 0
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None


def test_worker_thread_records_reach_file(tmp_path: Path, sample_folder: Path) -> None:
    """TC-05: Scanner records (emitted from pool threads) are written to the log file."""
    log_file = tmp_path / "scan.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    assert scan(sample_folder, max_workers=2) is not None
    _drain()

    content = log_file.read_text(encoding="utf-8")
    assert "Starting scan of" in content
    assert "Found directory" in content


def test_unwritable_log_location_falls_back(tmp_path: Path, capsys) -> None:
    """TC-06: A log path that cannot be opened does not abort the bootstrap."""
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    root = configure_logging(LoggingConfig(level="INFO", console=True, log_file=str(blocker / "app.log")))

    assert "Cannot open log file" in capsys.readouterr().err
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None
