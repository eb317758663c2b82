from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the node types of an in-memory directory listing. The tree is a
closed union of three kinds (directory, file, symbolic link); every kind can
be projected onto its shared `File` identity for naming and display.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Union

from treels.domain.metadata import Metadata

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class File:
    """
    Identity of one filesystem entry.

    Attributes:
        name: Final path component. Empty only for a traversal root.
        metadata: Metadata snapshot captured at traversal time.
    """
    name: str
    metadata: Metadata


@dataclass
class SymLink:
    """
    Symbolic link entry.

    Attributes:
        file: Identity of the link itself (not of its target).
        target: Raw link text, read once during traversal.
    """
    file: File
    target: str

    @property
    def name(self) -> str:
        return self.file.name

    @property
    def metadata(self) -> Metadata:
        return self.file.metadata


@dataclass
class Directory:
    """
    Directory entry with its children and bottom-up aggregates.

    Attributes:
        file: Identity of the directory.
        entries: Children in discovery order until sorted.
        total_size: Own size plus the contribution of every added child.
        count: Number of regular files reachable through added children.
    """
    file: File
    entries: List["FileTree"] = field(default_factory=list)
    total_size: int = 0
    count: int = 0

    @classmethod
    def new(cls, name: str, metadata: Metadata) -> "Directory":
        """Create an empty directory whose size aggregate starts at its own size."""
        return cls(file=File(name, metadata), total_size=metadata.size)

    @property
    def name(self) -> str:
        return self.file.name

    @property
    def metadata(self) -> Metadata:
        return self.file.metadata

    def add_node(self, node: "FileTree") -> None:
        """
        Append a child and fold its contribution into the aggregates.

        Files add their size and one to the count; subdirectories add their
        own aggregates; symbolic links add nothing.
        """
        if isinstance(node, File):
            self.total_size += node.metadata.size
            self.count += 1
        elif isinstance(node, Directory):
            self.total_size += node.total_size
            self.count += node.count
        self.entries.append(node)

    def __iter__(self) -> Iterator["FileTree"]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


FileTree = Union[Directory, File, SymLink]

# -----------------------------------------------------------------------------
# KIND PREDICATES AND PROJECTION
# -----------------------------------------------------------------------------

def is_dir(node: FileTree) -> bool:
    return isinstance(node, Directory)


def is_file(node: FileTree) -> bool:
    return isinstance(node, File)


def is_symlink(node: FileTree) -> bool:
    return isinstance(node, SymLink)


def as_file(node: FileTree) -> File:
    """Return the shared name/metadata view of any tree node."""
    if isinstance(node, File):
        return node
    return node.file
