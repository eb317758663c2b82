from __future__ import annotations

"""
Handler helpers: ownership tagging and the rotating log file.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

# Marks handlers owned by treels, so pytest's or a host application's stay put
_HANDLER_TAG_ATTR: str = "_treels_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_rotating_file_handler(
        log_file: str,
        level: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the log file, creating its directory if needed.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when the file
                                       cannot be opened (a warning is written
                                       to stderr and the listing continues).
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"treels: WARNING | cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level)
    fh.setFormatter(formatter)
    return fh
