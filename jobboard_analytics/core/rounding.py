"""Uniform rounding for every percentage and average the engine reports.

Python's built-in round() is banker's rounding; dashboards expect 2.5 -> 3.
All figures go through round_half_up so the same input never rounds two ways.
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round half away from zero to ``ndigits`` decimal places."""
    # str() gives the shortest repr, so 0.15 stays 0.15 instead of 0.1499...
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    """Round half away from zero to the nearest integer."""
    return int(round_half_up(value))
