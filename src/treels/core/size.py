from __future__ import annotations

"""
Size Formatter.

Converts byte counts into the strings shown in the size column, scaling by
powers of 1000 through the B, K, M, G and T units.
"""

import math
from typing import List, Tuple

UNITS: List[str] = ["B", "K", "M", "G", "T"]
SCALE = 1000


def scale_size(num_bytes: int) -> Tuple[int, str]:
    """
    Scale a byte count to the unit the listing displays it in.

    Escalates one unit at a time while the next quotient is at least one,
    rounding half up at every step.

    Returns:
        Tuple[int, str]: Scaled value and unit letter.
    """
    if num_bytes < 0:
        raise ValueError(f"size cannot be negative: {num_bytes}")

    value = num_bytes
    unit_index = 0
    while unit_index < len(UNITS) - 1 and value / SCALE >= 1:
        value = _round_half_up(value / SCALE)
        unit_index += 1
    return value, UNITS[unit_index]


def format_size(num_bytes: int, human_readable: bool) -> str:
    """
    Format a byte count for display.

    Args:
        num_bytes: Raw size in bytes.
        human_readable: Append the unit letter to the scaled value.

    Returns:
        str: Scaled value, with its unit letter when requested.
    """
    value, unit = scale_size(num_bytes)
    if human_readable:
        return f"{value}{unit}"
    return str(value)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
