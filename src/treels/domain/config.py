from __future__ import annotations

"""
Configuration Domain Management.

Defines the default session configuration and the immutable listing options
consumed by the walker and the renderer. Nothing is persisted: the session
dictionary is rebuilt from defaults and command-line overrides on every run.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
LISTING_FLAGS: List[str] = [
    "all",
    "recursive",
    "long",
    "size",
    "human_readable",
    "one_file_per_line",
]


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Traversal
        "all": False,
        "recursive": False,

        # Output Format
        "long": False,
        "size": False,
        "human_readable": False,
        "one_file_per_line": False,

        # Diagnostics
        "debug": False,
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Listing Options
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ListingOptions:
    """
    Fixed set of boolean switches driving a listing.

    Attributes:
        all: Include entries whose name starts with a dot.
        recursive: Descend into subdirectories and print them as blocks.
        long: Use the detailed per-entry format.
        size: Prefix long lines with the allocated size in KiB.
        human_readable: Scale sizes with a K/M/G/T suffix.
        one_file_per_line: Put every compact entry on its own line.
    """
    all: bool = False
    recursive: bool = False
    long: bool = False
    size: bool = False
    human_readable: bool = False
    one_file_per_line: bool = False

    @property
    def include_hidden(self) -> bool:
        return self.all

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ListingOptions":
        """Build options from a validated configuration dictionary."""
        return cls(**{flag: bool(config.get(flag, False)) for flag in LISTING_FLAGS})
