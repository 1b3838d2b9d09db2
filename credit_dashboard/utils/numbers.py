"""Numeric helpers shared by the scoring and loan modules"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up (2.5 -> 3, not 2)"""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """Limit value to the closed range [lower, upper]"""
    return min(max(value, lower), upper)
