from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line flags and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the treels CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="treels",
        description="List the contents of the current directory.",
    )

    # --- Traversal ---
    p.add_argument(
        "-a", "--all",
        action="store_true",
        help="Do not ignore entries starting with '.'.",
    )
    p.add_argument(
        "-R", "--recursive",
        action="store_true",
        help="List subdirectories recursively.",
    )

    # --- Output Format ---
    p.add_argument(
        "-l", "--long",
        action="store_true",
        help="Use a long listing format.",
    )
    p.add_argument(
        "-s", "--size",
        action="store_true",
        help="Print the allocated size of each file, in KiB (long format).",
    )
    p.add_argument(
        "-H", "--human-readable",
        dest="human_readable",
        action="store_true",
        help="Print sizes with K/M/G/T suffixes.",
    )
    p.add_argument(
        "-1",
        dest="one_file_per_line",
        action="store_true",
        help="List one file per line.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only flags that were switched on are emitted, so unset flags keep their
    configured defaults after merging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    for flag in ("all", "recursive", "long", "size", "human_readable", "one_file_per_line", "debug"):
        if getattr(args, flag):
            overrides[flag] = True

    overrides["log_file"] = args.log_file

    return overrides
