from __future__ import annotations

"""
Metadata Provider.

Translates operating-system stat results into the platform-neutral
`Metadata` record. Owner and group ids are resolved to names through the
POSIX user and group databases when they are available; otherwise, or when a
lookup fails, the decimal id is used.
"""

import logging
import os
import stat
from functools import lru_cache
from typing import Optional

from treels.domain.errors import TraversalError
from treels.domain.metadata import FileKind, Metadata

try:
    import grp
    import pwd
except ImportError:  # Windows has no user or group database
    grp = None  # type: ignore[assignment]
    pwd = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_metadata(path: str, follow_symlinks: bool = False) -> Metadata:
    """
    Read the metadata of a path.

    Args:
        path: Filesystem path to inspect.
        follow_symlinks: Report the link target instead of the link itself.

    Returns:
        Metadata: Snapshot of the entry.

    Raises:
        TraversalError: If the entry cannot be inspected.
    """
    try:
        st = os.stat(path, follow_symlinks=follow_symlinks)
    except OSError as e:
        raise TraversalError(f"cannot access '{path}': {e.strerror or e}", path) from e
    return metadata_from_stat(st)


def read_entry_metadata(entry: os.DirEntry) -> Metadata:
    """
    Read the metadata of a directory-entry handle without following links.

    Raises:
        TraversalError: If the entry vanished or cannot be inspected.
    """
    try:
        st = entry.stat(follow_symlinks=False)
    except OSError as e:
        raise TraversalError(f"cannot access '{entry.path}': {e.strerror or e}", entry.path) from e
    return metadata_from_stat(st)


def metadata_from_stat(st: os.stat_result) -> Metadata:
    """Build a `Metadata` record from a raw stat result."""
    return Metadata(
        size=int(st.st_size),
        kind=_kind_from_mode(st.st_mode),
        mode=stat.S_IMODE(st.st_mode),
        nlink=int(st.st_nlink),
        uid=int(st.st_uid),
        gid=int(st.st_gid),
        owner=user_name(st.st_uid),
        group=group_name(st.st_gid),
        blocks=_blocks_from_stat(st),
        mtime=_mtime_from_stat(st),
    )


@lru_cache(maxsize=256)
def user_name(uid: int) -> str:
    """Resolve a user id to its login name, or its decimal form."""
    if pwd is None:
        return str(uid)
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        logger.debug(f"No user entry for uid {uid}")
        return str(uid)


@lru_cache(maxsize=256)
def group_name(gid: int) -> str:
    """Resolve a group id to its name, or its decimal form."""
    if grp is None:
        return str(gid)
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        logger.debug(f"No group entry for gid {gid}")
        return str(gid)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _kind_from_mode(mode: int) -> FileKind:
    if stat.S_ISLNK(mode):
        return FileKind.SYMLINK
    if stat.S_ISDIR(mode):
        return FileKind.DIRECTORY
    if stat.S_ISREG(mode):
        return FileKind.FILE
    return FileKind.OTHER


def _blocks_from_stat(st: os.stat_result) -> int:
    """Return allocated 512-byte blocks, estimating from the size when absent."""
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return (int(st.st_size) + 511) // 512
    return int(blocks)


def _mtime_from_stat(st: os.stat_result) -> Optional[float]:
    mtime = getattr(st, "st_mtime", None)
    if mtime is None:
        return None
    return float(mtime)
