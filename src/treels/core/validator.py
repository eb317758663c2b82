from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration sources (command line, callers) and the
listing core. Coerces loosely typed values into the expected schema and fills
missing keys with the domain defaults.
"""

import logging
from typing import Any, Dict, List, Tuple

from treels.domain.config import LISTING_FLAGS, get_default_config

logger = logging.getLogger(__name__)

_TRUE_WORDS = ("true", "1", "yes", "y", "on")
_FALSE_WORDS = ("false", "0", "no", "n", "off")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and the
                                          warnings raised while coercing.

    Raises:
        TypeError: In strict mode, when a value has the wrong type.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    unknown = sorted(k for k in config if k not in defaults)
    for key in unknown:
        warnings.append(f"Unknown field '{key}' ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in LISTING_FLAGS + ["debug"]:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_file"] = _as_str(merged.get("log_file"), defaults["log_file"], "log_file", warnings, strict)

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in _TRUE_WORDS:
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in _FALSE_WORDS:
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
