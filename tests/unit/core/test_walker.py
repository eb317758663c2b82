from __future__ import annotations

"""
Unit tests for the Directory Tree Walker.

Verifies tree construction on a real temporary directory: hidden filtering,
shallow versus recursive subdirectories, aggregates, symlinks and the
traversal failure modes.
"""

import os
import sys
from pathlib import Path

import pytest

from treels.core.walker import build_tree, relative_name
from treels.domain.config import ListingOptions
from treels.domain.errors import LinkResolutionError, NameEncodingError, TraversalError
from treels.domain.metadata import FileKind
from treels.domain.tree_models import Directory, File, SymLink, as_file


def _by_name(directory: Directory):
    return {as_file(entry).name: entry for entry in directory.entries}


def test_non_recursive_tree_has_shallow_subdirectory(listing_root: Path):
    tree = build_tree(str(listing_root), ListingOptions())

    assert isinstance(tree, Directory)
    assert tree.name == ""
    entries = _by_name(tree)
    assert set(entries) == {"a.txt", "sub"}

    sub = entries["sub"]
    assert isinstance(sub, Directory)
    assert sub.entries == []
    assert sub.count == 0
    assert sub.total_size == sub.metadata.size
    assert sub.metadata.kind is FileKind.DIRECTORY

    assert tree.count == 1
    assert tree.total_size == tree.metadata.size + 10 + sub.metadata.size


def test_recursive_tree_descends_and_aggregates(listing_root: Path):
    tree = build_tree(str(listing_root), ListingOptions(recursive=True))

    sub = _by_name(tree)["sub"]
    assert isinstance(sub, Directory)
    assert [as_file(e).name for e in sub.entries] == ["b.txt"]
    assert sub.count == 1
    assert sub.total_size == sub.metadata.size + 5

    assert tree.count == 2
    assert tree.total_size == tree.metadata.size + 10 + sub.total_size


def test_hidden_entries_require_all(listing_root: Path):
    without_hidden = build_tree(str(listing_root), ListingOptions())
    with_hidden = build_tree(str(listing_root), ListingOptions(all=True))

    assert ".env" not in _by_name(without_hidden)
    assert ".env" in _by_name(with_hidden)
    assert isinstance(_by_name(with_hidden)[".env"], File)
    assert with_hidden.count == without_hidden.count + 1
    assert with_hidden.total_size == without_hidden.total_size + 3


def test_hidden_directories_are_not_descended(listing_root: Path):
    hidden_dir = listing_root / ".cache"
    hidden_dir.mkdir()
    (hidden_dir / "blob").write_bytes(b"x" * 100)

    tree = build_tree(str(listing_root), ListingOptions(recursive=True))

    assert ".cache" not in _by_name(tree)
    assert tree.count == 2


def test_file_metadata_is_captured(listing_root: Path):
    tree = build_tree(str(listing_root), ListingOptions())
    a_txt = _by_name(tree)["a.txt"]

    assert isinstance(a_txt, File)
    assert a_txt.metadata.size == 10
    assert a_txt.metadata.kind is FileKind.FILE


@pytest.mark.skipif(not hasattr(os, "symlink") or sys.platform == "win32", reason="symlinks required")
def test_symlink_is_captured_with_target(listing_root: Path):
    os.symlink("a.txt", listing_root / "link")
    os.symlink("sub", listing_root / "dirlink")

    tree = build_tree(str(listing_root), ListingOptions(recursive=True))
    entries = _by_name(tree)

    link = entries["link"]
    assert isinstance(link, SymLink)
    assert link.target == "a.txt"
    assert link.metadata.kind is FileKind.SYMLINK

    # Links to directories are not followed
    assert isinstance(entries["dirlink"], SymLink)
    assert tree.count == 2


def test_missing_root_raises_traversal_error(tmp_path: Path):
    missing = tmp_path / "does_not_exist"

    with pytest.raises(TraversalError) as exc_info:
        build_tree(str(missing), ListingOptions())
    assert exc_info.value.path == str(missing)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_file_root_raises_traversal_error(listing_root: Path):
    with pytest.raises(TraversalError):
        build_tree(str(listing_root / "a.txt"), ListingOptions())


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts non-UTF-8 names")
def test_undecodable_name_raises_name_encoding_error(tmp_path: Path):
    root = tmp_path / "raw"
    root.mkdir()
    fd = os.open(os.fsencode(str(root)) + b"/bad\xff", os.O_CREAT | os.O_WRONLY, 0o644)
    os.close(fd)

    with pytest.raises(NameEncodingError):
        build_tree(str(root), ListingOptions())


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts non-UTF-8 link targets")
def test_undecodable_link_target_raises_link_resolution_error(tmp_path: Path):
    root = tmp_path / "links"
    root.mkdir()
    os.symlink(b"\xff", os.fsencode(str(root / "bad")))

    with pytest.raises(LinkResolutionError) as excinfo:
        build_tree(str(root), ListingOptions())

    assert excinfo.value.path == str(root / "bad")


def test_relative_name_strips_root_and_separators():
    root = os.path.join("base", "dir")

    assert relative_name(root, root) == ""
    assert relative_name(os.path.join(root, "sub"), root) == "sub"
