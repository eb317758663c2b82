from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging and
validation, then the build, sort and render stages over the current working
directory.
"""

import os
import sys
from typing import Any, Dict, List, Optional

from treels.core.renderer import render_tree
from treels.core.sorter import sort_tree
from treels.core.validator import validate_config
from treels.core.walker import build_tree
from treels.domain.config import ListingOptions, get_default_config
from treels.domain.errors import ListingError
from treels.infra.logging import LoggingConfig, configure_logging, get_logger
from treels.interface.cli import args as cli_args
from treels.interface.cli.console import print_lines

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the listing workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Configuration merge and validation
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(get_default_config(), overrides)
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    logging_conf = LoggingConfig(
        level="DEBUG" if clean_conf["debug"] else "WARNING",
        console=True,
        log_file=clean_conf["log_file"] or None,
    )
    configure_logging(logging_conf)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    options = ListingOptions.from_config(clean_conf)
    root_path = os.getcwd()
    logger.debug(f"Listing {root_path} with {options}")

    # 4. Build, sort and render
    try:
        return _run_listing(root_path, options)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130


def _run_listing(root_path: str, options: ListingOptions) -> int:
    # Build failures abort before any output is produced
    try:
        tree = build_tree(root_path, options)
    except (ListingError, OSError) as e:
        logger.debug(f"Traversal failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        sort_tree(tree)
    except NotADirectoryError as e:
        logger.warning(f"Listing left unsorted: {e}")

    try:
        print_lines(render_tree(tree, options))
    except (ListingError, OSError) as e:
        logger.debug(f"Rendering failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only keys already present in the base are merged, and `None` values are
    skipped so that unset command-line options keep their defaults.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out


if __name__ == "__main__":
    sys.exit(main())
