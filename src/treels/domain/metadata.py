from __future__ import annotations

"""
Entry Metadata Record.

Platform-neutral view of the attributes the listing needs for one filesystem
entry. Produced by the metadata provider in the infrastructure layer and
consumed by the tree model, the sorter and the renderer.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from treels.domain.errors import UnsupportedTimeError


class FileKind(Enum):
    """Kind of a filesystem entry, observed without following links."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True)
class Metadata:
    """
    Immutable metadata snapshot for a single entry.

    Attributes:
        size: Size in bytes.
        kind: Entry kind as reported by the provider.
        mode: Raw mode integer; only the permission bits are interpreted.
        nlink: Hard link count.
        uid: Numeric owner id.
        gid: Numeric group id.
        owner: Resolved owner name, or the decimal uid when unresolvable.
        group: Resolved group name, or the decimal gid when unresolvable.
        blocks: Allocated 512-byte blocks.
        mtime: Modification time in POSIX seconds, None when unavailable.
    """
    size: int = 0
    kind: FileKind = FileKind.FILE
    mode: int = 0
    nlink: int = 1
    uid: int = 0
    gid: int = 0
    owner: str = "0"
    group: str = "0"
    blocks: int = 0
    mtime: Optional[float] = None

    def is_dir(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    def is_symlink(self) -> bool:
        return self.kind is FileKind.SYMLINK

    def modified(self) -> datetime:
        """
        Return the modification time as a local datetime.

        Raises:
            UnsupportedTimeError: If the provider could not supply a time.
        """
        if self.mtime is None:
            raise UnsupportedTimeError("modification time is not available on this platform")
        return datetime.fromtimestamp(self.mtime)
