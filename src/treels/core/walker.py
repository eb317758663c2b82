from __future__ import annotations

"""
Directory Tree Walker.

Builds the in-memory listing tree from the filesystem with a depth-first
traversal. Applies the hidden-entry filter and, in non-recursive mode,
captures child directories as shallow nodes so they can still be displayed.
"""

import logging
import os
from typing import Protocol

from treels.domain.errors import LinkResolutionError, NameEncodingError, TraversalError
from treels.domain.tree_models import Directory, File, FileTree, SymLink
from treels.infra.metadata import read_entry_metadata, read_metadata

logger = logging.getLogger(__name__)


class TraversalPolicy(Protocol):
    """The two switches the walker reads from the listing options."""

    @property
    def include_hidden(self) -> bool: ...

    @property
    def recursive(self) -> bool: ...

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(root_path: str, policy: TraversalPolicy) -> FileTree:
    """
    Build the listing tree rooted at a directory.

    Args:
        root_path: Directory to list.
        policy: Hidden-entry and recursion switches.

    Returns:
        FileTree: A `Directory` node named with the empty string.

    Raises:
        TraversalError: If a directory or entry cannot be read.
        NameEncodingError: If an entry name is not valid text.
        LinkResolutionError: If a link target cannot be read.
    """
    logger.debug(
        f"Building tree for: {root_path} "
        f"(recursive={policy.recursive}, include_hidden={policy.include_hidden})"
    )
    tree = _walk_dir(root_path, root_path, policy)
    logger.debug(f"Tree built: {tree.count} files, {tree.total_size} bytes")
    return tree

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (SCANNING)
# -----------------------------------------------------------------------------

def _walk_dir(current: str, root: str, policy: TraversalPolicy) -> Directory:
    """Visit one directory and attach its filtered children."""
    directory = Directory.new(relative_name(current, root), read_metadata(current, follow_symlinks=True))

    try:
        with os.scandir(current) as it:
            children = list(it)
    except OSError as e:
        raise TraversalError(f"cannot open directory '{current}': {e.strerror or e}", current) from e

    for entry in children:
        name = _entry_name(entry)
        if name.startswith(".") and not policy.include_hidden:
            continue

        try:
            entry_is_link = entry.is_symlink()
            entry_is_dir = entry.is_dir(follow_symlinks=False)
            entry_is_file = entry.is_file(follow_symlinks=False)
        except OSError as e:
            raise TraversalError(f"cannot access '{entry.path}': {e.strerror or e}", entry.path) from e

        if entry_is_link:
            directory.add_node(_read_symlink(entry, name))
        elif entry_is_dir:
            if policy.recursive:
                directory.add_node(_walk_dir(entry.path, current, policy))
            else:
                directory.add_node(Directory.new(relative_name(entry.path, root), read_entry_metadata(entry)))
        elif entry_is_file:
            directory.add_node(File(name, read_entry_metadata(entry)))
        else:
            logger.debug(f"Skipping special file: {entry.path}")

    return directory


def _read_symlink(entry: os.DirEntry, name: str) -> SymLink:
    try:
        target = os.readlink(entry.path)
    except OSError as e:
        raise LinkResolutionError(f"cannot read link '{entry.path}': {e.strerror or e}", entry.path) from e
    if not _is_text(target):
        raise LinkResolutionError(f"link target of '{entry.path}' is not valid text", entry.path)
    return SymLink(File(name, read_entry_metadata(entry)), target)


def relative_name(path: str, root: str) -> str:
    """
    Return a path relative to a traversal root, without leading separators.

    The root itself yields the empty string.
    """
    name = path[len(root):] if path.startswith(root) else os.path.basename(path)
    name = name.lstrip(os.sep)
    if os.altsep:
        name = name.lstrip(os.altsep)
    if not _is_text(name):
        raise NameEncodingError(f"cannot represent '{path}' as text", path)
    return name


def _entry_name(entry: os.DirEntry) -> str:
    name = entry.name
    if not _is_text(name):
        raise NameEncodingError(f"cannot represent '{entry.path}' as text", entry.path)
    return name


def _is_text(value: str) -> bool:
    # Undecodable bytes surface as lone surrogates under surrogateescape
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
