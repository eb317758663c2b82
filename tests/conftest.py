from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for metadata records and on-disk sample listings.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treels.domain.metadata import FileKind, Metadata  # noqa: E402

FIXED_MTIME = datetime(2024, 3, 5, 14, 7).timestamp()


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_metadata() -> Callable[..., Metadata]:
    """
    Return a factory for deterministic metadata records.

    Defaults describe a 0644 regular file owned by alice:staff, modified on
    5 March at 14:07 local time.
    """
    def _factory(**overrides: Any) -> Metadata:
        values = {
            "size": 0,
            "kind": FileKind.FILE,
            "mode": 0o644,
            "nlink": 1,
            "uid": 501,
            "gid": 20,
            "owner": "alice",
            "group": "staff",
            "blocks": 0,
            "mtime": FIXED_MTIME,
        }
        values.update(overrides)
        return Metadata(**values)

    return _factory


@pytest.fixture
def listing_root(tmp_path: Path) -> Path:
    """
    Create a small directory to list.

    Structure:
    /listing
      a.txt      (10 bytes)
      .env       (3 bytes)
      /sub
        b.txt    (5 bytes)
    """
    root = tmp_path / "listing"
    root.mkdir()
    (root / "a.txt").write_bytes(b"0123456789")
    (root / ".env").write_bytes(b"X=1")

    sub = root / "sub"
    sub.mkdir()
    (sub / "b.txt").write_bytes(b"01234")

    return root
