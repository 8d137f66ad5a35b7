from __future__ import annotations

"""
Logging Core Orchestrator.

Configures the root logger once per process. Records from every thread
(including scan workers) go through a single QueueHandler; a QueueListener
thread drains the queue into the console and file sinks so that slow I/O
never stalls the scanner or the GUI loop.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from dirstat.domain.constants import LOG_FILE_NAME
from dirstat.infra.fs import get_user_data_dir
from dirstat.infra.logging.config import _LEVEL_MAP, LoggingConfig
from dirstat.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_dirstat_configured"
_QUEUE_LISTENER_ATTR: str = "_dirstat_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = LOG_FILE_NAME) -> str:
    """Return the persistent log file location inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install the queue-based handler chain on the root logger.

    Repeated calls are no-ops unless ``force`` is set, in which case the
    previously installed handlers and listener are torn down first.

    Args:
        cfg: Logging settings.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    _remove_our_handlers(root)
    _stop_existing_listener(root)

    sinks: List[logging.Handler] = []
    if cfg.console:
        sinks.append(_create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))
    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            sinks.append(fh)

    if not sinks:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    root.addHandler(_tag_handler(QueueHandler(log_queue)))

    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on interpreter shutdown
    atexit.register(_safe_stop_listener, listener)

    return root


def get_logger(name: str) -> logging.Logger:
    """Acquire a named logger (usually ``__name__``)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a level name to its numeric constant, defaulting to INFO."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener, tolerating one that was already stopped."""
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
