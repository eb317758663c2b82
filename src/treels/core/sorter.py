from __future__ import annotations

"""
Listing Sorter.

Orders the children of every directory in a listing tree, in place, by a
case-insensitive name key that ignores leading punctuation and digits.
"""

from treels.domain.tree_models import Directory, FileTree, as_file


def name_sort_key(name: str) -> str:
    """
    Return the comparison key for an entry name.

    The name is lowercased and its leading run of characters that are not
    lowercase letters is dropped. Names without any lowercase letter keep
    their full lowercased form.

    Examples:
        "Banana" -> "banana", "_cherry" -> "cherry", "2file" -> "file",
        ".hidden" -> "hidden", "123" -> "123".
    """
    lowered = name.lower()
    for index, char in enumerate(lowered):
        if char.islower():
            return lowered[index:]
    return lowered


def entry_sort_key(node: FileTree) -> str:
    return name_sort_key(as_file(node).name)


def sort_tree(tree: FileTree) -> None:
    """
    Sort a listing tree in place, depth-first.

    Args:
        tree: Root of the listing.

    Raises:
        NotADirectoryError: If the root is not a directory node.
    """
    if not isinstance(tree, Directory):
        raise NotADirectoryError(f"cannot sort '{as_file(tree).name}': not a directory")
    _sort_directory(tree)


def _sort_directory(directory: Directory) -> None:
    for entry in directory.entries:
        if isinstance(entry, Directory):
            _sort_directory(entry)
    # list.sort is stable: equal keys keep their discovery order
    directory.entries.sort(key=entry_sort_key)
