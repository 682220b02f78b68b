from __future__ import annotations

"""
Logging Core Orchestrator.

Owns the idempotent lifecycle of the package's logging setup. Records are
pushed through a QueueHandler and written by a QueueListener thread, so file
writes never run inside a tree mutation holding the partition lock.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from partitionfs.infra.logging.config import _LEVEL_MAP, LoggingConfig
from partitionfs.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_partitionfs_configured"
_QUEUE_LISTENER_ATTR: str = "_partitionfs_queue_listener"

# Loggers of this package all descend from this name
_PACKAGE_LOGGER = "partitionfs"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach console and/or file output to the package logger.

    Repeated calls are no-ops unless force is set, in which case the handlers
    and listener installed previously are torn down and rebuilt.

    Args:
        cfg: Logging configuration.
        force: If True, re-initialize even when already configured.

    Returns:
        logging.Logger: The configured package logger.
    """
    pkg_logger = logging.getLogger(_PACKAGE_LOGGER)

    if getattr(pkg_logger, _CONFIGURED_FLAG_ATTR, False) and not force:
        return pkg_logger

    level_int = _parse_level(cfg.level)
    pkg_logger.setLevel(level_int)

    shutdown_logging()

    handlers_list: List[logging.Handler] = []
    if cfg.console:
        handlers_list.append(_create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))
    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers_list.append(fh)

    if not handlers_list:
        return pkg_logger

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
    listener.start()

    pkg_logger.addHandler(queue_handler)
    setattr(pkg_logger, _QUEUE_LISTENER_ATTR, listener)
    setattr(pkg_logger, _CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on interpreter exit
    atexit.register(_safe_stop_listener, listener)

    return pkg_logger


def shutdown_logging() -> None:
    """Stop the queue listener and detach every handler this package installed."""
    pkg_logger = logging.getLogger(_PACKAGE_LOGGER)

    listener = getattr(pkg_logger, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        atexit.unregister(_safe_stop_listener)
        for h in listener.handlers:
            h.close()
        setattr(pkg_logger, _QUEUE_LISTENER_ATTR, None)

    for h in list(pkg_logger.handlers):
        if _is_our_handler(h):
            pkg_logger.removeHandler(h)
            h.close()

    setattr(pkg_logger, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a QueueListener, tolerating one that was already stopped."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
