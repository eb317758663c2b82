from __future__ import annotations

"""
Listing Error Taxonomy.

Defines the failure kinds raised while building, sorting and rendering a
directory listing. Traversal failures abort the run; the time failure is
recovered locally by the renderer.
"""

from typing import Optional


class ListingError(Exception):
    """Base class for every failure raised by the listing core."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class TraversalError(ListingError):
    """A directory could not be read or an entry's metadata is unavailable."""


class NameEncodingError(ListingError):
    """A filesystem name cannot be represented as valid text."""


class LinkResolutionError(ListingError):
    """A symbolic link target cannot be read as text."""


class UnsupportedTimeError(ListingError):
    """The platform supplied no modification time for an entry."""
