from __future__ import annotations

"""
Logging Lifecycle.

Installs a single queue handler on the root logger. A listener thread drains
the queue into the stderr and rotating-file handlers, so diagnostics never
interleave with listing output written on the main thread.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from treels.infra.logging.config import _LEVEL_MAP, LoggingConfig
from treels.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_treels_configured"
_QUEUE_LISTENER_ATTR: str = "_treels_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route root-logger records through a queue to the configured sinks.

    Only the first call takes effect unless `force` is set.

    Args:
        cfg: Level, sinks and formats to install.
        force: Replace the handlers of an earlier call.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = _LEVEL_MAP.get(cfg.level.upper(), logging.WARNING)
    root.setLevel(level)
    shutdown_logging()

    sinks: List[logging.Handler] = []
    if cfg.console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setLevel(level)
        stream.setFormatter(logging.Formatter(cfg.console_fmt))
        sinks.append(stream)

    if cfg.log_file:
        file_formatter = logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt)
        fh = _create_rotating_file_handler(cfg.log_file, level, file_formatter, cfg.max_bytes, cfg.backup_count)
        if fh:
            sinks.append(fh)

    if not sinks:
        return root

    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(records)
    _tag_handler(queue_handler)

    listener = QueueListener(records, *sinks, respect_handler_level=True)
    listener.start()
    atexit.register(_stop_listener, listener)

    root.addHandler(queue_handler)
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Flush queued records, then detach the handlers installed above."""
    root = logging.getLogger()
    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in list(root.handlers):
        if _is_our_handler(handler):
            root.removeHandler(handler)
            handler.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _stop_listener(listener: Optional[QueueListener]) -> None:
    # stop() fails on a listener whose thread was already joined
    if listener is None or getattr(listener, "_thread", None) is None:
        return
    listener.stop()
    for sink in listener.handlers:
        sink.close()
