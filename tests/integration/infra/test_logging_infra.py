from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
file output of domain events, and that host handlers are left alone.
"""

import logging
import time
from pathlib import Path
from typing import Iterator

import pytest

from partitionfs.core.session import NamespaceSession
from partitionfs.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from partitionfs.infra.logging import core as core_module
from partitionfs.infra.logging.core import _QUEUE_LISTENER_ATTR
from partitionfs.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Detach package handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()
    logging.getLogger("partitionfs").setLevel(logging.NOTSET)


def _our_handlers() -> list:
    return [h for h in logging.getLogger("partitionfs").handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """Repeated configuration does not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    initial = len(_our_handlers())
    configure_logging(cfg)

    assert initial == 1
    assert len(_our_handlers()) == initial


def test_force_rebuilds_listener() -> None:
    cfg = LoggingConfig(level="INFO", console=True)
    pkg_logger = configure_logging(cfg)
    first = getattr(pkg_logger, _QUEUE_LISTENER_ATTR)

    configure_logging(cfg, force=True)

    assert getattr(pkg_logger, _QUEUE_LISTENER_ATTR) is not first
    assert len(_our_handlers()) == 1


def test_no_outputs_installs_nothing() -> None:
    configure_logging(LoggingConfig(console=False, log_file=None))
    assert _our_handlers() == []


def test_domain_events_reach_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "partitionfs.log"
    session = NamespaceSession({"log_level": "DEBUG", "log_file": str(log_file)})
    session.enable_logging(console=False)

    session.root.create_folder("docs").create_file("readme", 12)
    shutdown_logging()  # joins the listener thread, flushing the queue

    content = log_file.read_text(encoding="utf-8")
    assert "File created: root/docs/readme (12 bytes)" in content


def test_log_rotation(tmp_path: Path) -> None:
    log_file = tmp_path / "rotate.log"
    configure_logging(LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    ))
    logger = get_logger("partitionfs.test_rotate")

    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    time.sleep(0.5)

    assert log_file.exists()
    assert (tmp_path / "rotate.log.1").exists(), "Rotation backup file was not created."


def test_foreign_handlers_survive_shutdown() -> None:
    pkg_logger = logging.getLogger("partitionfs")
    foreign = logging.NullHandler()
    pkg_logger.addHandler(foreign)
    try:
        configure_logging(LoggingConfig(console=True))
        shutdown_logging()
        assert foreign in pkg_logger.handlers
    finally:
        pkg_logger.removeHandler(foreign)


def test_forced_reconfiguration_keeps_one_exit_hook(monkeypatch: pytest.MonkeyPatch) -> None:
    """Rebuilding the listener replaces its interpreter-exit hook instead of stacking another."""
    hooks: list = []

    def fake_register(fn, *args):
        hooks.append((fn, args))

    def fake_unregister(fn):
        hooks[:] = [hook for hook in hooks if hook[0] is not fn]

    monkeypatch.setattr(core_module.atexit, "register", fake_register)
    monkeypatch.setattr(core_module.atexit, "unregister", fake_unregister)

    cfg = LoggingConfig(level="INFO", console=True)
    for _ in range(3):
        configure_logging(cfg, force=True)

    assert len(hooks) == 1
    assert hooks[0][1] == (getattr(logging.getLogger("partitionfs"), _QUEUE_LISTENER_ATTR),)

    shutdown_logging()
    assert hooks == []
