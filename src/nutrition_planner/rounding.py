"""Rounding helpers matching the half-up rounding shown to users."""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positives (2.5 -> 3, 0.25 -> 0.3)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round to the nearest integer, halves up."""
    return int(math.floor(value + 0.5))
