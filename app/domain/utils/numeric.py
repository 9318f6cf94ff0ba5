"""Numeric helpers shared by the scoring services."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero for positive values.

    The builtin ``round`` uses banker's rounding (``round(0.5) == 0``), which
    would make a 1-of-6 multi-select score zero.
    """
    return math.floor(value + 0.5)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(upper, value))
