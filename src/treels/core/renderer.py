from __future__ import annotations

"""
Listing Renderer.

Converts a sorted listing tree into styled output lines. Every directory is
rendered in two passes: the first measures the column widths over all of its
children, the second emits one entry at a time using those widths. In
recursive mode child directories are deferred to a backlog and rendered as
separate blocks after their parent's entries.
"""

import logging
import unicodedata
from dataclasses import dataclass
from typing import List

from treels.core.size import format_size
from treels.domain.config import ListingOptions
from treels.domain.errors import UnsupportedTimeError
from treels.domain.metadata import Metadata
from treels.domain.render_models import Line, Span, Style
from treels.domain.tree_models import Directory, FileTree, SymLink, as_file

logger = logging.getLogger(__name__)

PERM_EXECUTE = 1
PERM_WRITE = 2
PERM_READ = 4

PERM_USER_SHIFT = 6
PERM_GROUP_SHIFT = 3
PERM_OTHER_SHIFT = 0

TIME_FORMAT = "%d %b %H:%M"
TIME_PLACEHOLDER = "-- --- --:--"
COMPACT_GUTTER = "  "
CONTROL_PLACEHOLDER = "?"


@dataclass(frozen=True)
class ColumnWidths:
    """Widths of the aligned long-mode columns of one directory."""
    blocks: int = 0
    nlink: int = 0
    owner: int = 0
    group: int = 0
    size: int = 0

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(tree: FileTree, options: ListingOptions) -> List[Line]:
    """
    Render a listing tree into output lines.

    Args:
        tree: Sorted listing root. Non-directory roots render nothing.
        options: Output switches.

    Returns:
        List[Line]: Styled lines in print order.
    """
    lines: List[Line] = []
    if not isinstance(tree, Directory):
        logger.debug(f"Nothing to render for non-directory root '{as_file(tree).name}'")
        return lines

    _render_directory(tree, tree.name, options, lines)
    return lines


def measure_columns(directory: Directory, options: ListingOptions) -> ColumnWidths:
    """First pass: compute the column widths over a directory's direct children."""
    if not directory.entries:
        return ColumnWidths()

    metadatas = [as_file(entry).metadata for entry in directory.entries]
    return ColumnWidths(
        blocks=max(len(str(block_size(m))) for m in metadatas),
        nlink=digit_width(max(m.nlink for m in metadatas)),
        owner=max(len(m.owner) for m in metadatas),
        group=max(len(m.group) for m in metadatas),
        size=max(len(format_size(m.size, options.human_readable)) for m in metadatas),
    )


def permission_string(metadata: Metadata) -> str:
    """Return the ten-character kind and rwx string of an entry."""
    if metadata.is_dir():
        kind = "d"
    elif metadata.is_symlink():
        kind = "l"
    else:
        kind = "-"
    return (
        kind
        + _permission_triplet(metadata.mode, PERM_USER_SHIFT)
        + _permission_triplet(metadata.mode, PERM_GROUP_SHIFT)
        + _permission_triplet(metadata.mode, PERM_OTHER_SHIFT)
    )


def format_modified(metadata: Metadata) -> str:
    """Return the modification timestamp, or a placeholder when unsupported."""
    try:
        return metadata.modified().strftime(TIME_FORMAT)
    except UnsupportedTimeError:
        return TIME_PLACEHOLDER


def block_size(metadata: Metadata) -> int:
    """Convert 512-byte blocks into 1024-byte units, rounding up."""
    return (metadata.blocks + 1) // 2


def digit_width(value: int) -> int:
    return len(str(max(value, 0)))


def display_name(name: str) -> str:
    """Replace control characters (tab, newline and the like) with `?`."""
    return "".join(
        CONTROL_PLACEHOLDER if unicodedata.category(char) == "Cc" else char
        for char in name
    )

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (DIRECTORY BLOCKS)
# -----------------------------------------------------------------------------

def _render_directory(
        directory: Directory,
        rel_path: str,
        options: ListingOptions,
        lines: List[Line],
) -> None:
    """Emit one directory block followed by its backlog of subdirectories."""
    if options.recursive and rel_path:
        lines.append(Line.text(f"{display_name(rel_path)}:"))
    if options.long:
        lines.append(Line.text(f"total {directory.total_size // 1024}"))

    backlog: List[Directory] = []
    for entry in directory.entries:
        if options.recursive and isinstance(entry, Directory):
            backlog.append(entry)

    if options.long:
        widths = measure_columns(directory, options)
        for entry in directory.entries:
            lines.append(_long_line(entry, widths, options))
    else:
        _emit_compact(directory, options, lines)

    for child in backlog:
        lines.append(Line())
        child_path = f"{rel_path}/{child.name}" if rel_path else child.name
        _render_directory(child, child_path, options, lines)


def _emit_compact(directory: Directory, options: ListingOptions, lines: List[Line]) -> None:
    names = [_name_span(entry, compact=True) for entry in directory.entries]
    if not names:
        return

    if options.one_file_per_line:
        lines.extend(Line.of(span) for span in names)
        return

    spans: List[Span] = []
    for index, span in enumerate(names):
        if index:
            spans.append(Span(COMPACT_GUTTER))
        spans.append(span)
    lines.append(Line(spans=tuple(spans)))

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (ENTRY FORMATTING)
# -----------------------------------------------------------------------------

def _long_line(entry: FileTree, widths: ColumnWidths, options: ListingOptions) -> Line:
    metadata = as_file(entry).metadata
    columns: List[str] = []
    if options.size:
        columns.append(str(block_size(metadata)).rjust(widths.blocks))
    columns.extend([
        permission_string(metadata),
        str(metadata.nlink).rjust(widths.nlink),
        metadata.owner.ljust(widths.owner),
        metadata.group.ljust(widths.group),
        format_size(metadata.size, options.human_readable).rjust(widths.size),
        format_modified(metadata),
    ])

    spans = [Span(" ".join(columns) + " "), _name_span(entry, compact=False)]
    if isinstance(entry, SymLink):
        spans.append(Span(f" -> {display_name(entry.target)}"))
    return Line(spans=tuple(spans))


def _name_span(entry: FileTree, compact: bool) -> Span:
    name = display_name(as_file(entry).name)
    if isinstance(entry, Directory):
        return Span(f"{name}/" if compact else name, Style.DIRECTORY)
    return Span(name)


def _permission_triplet(mode: int, shift: int) -> str:
    return (
        ("r" if mode & (PERM_READ << shift) else "-")
        + ("w" if mode & (PERM_WRITE << shift) else "-")
        + ("x" if mode & (PERM_EXECUTE << shift) else "-")
    )
