"""
Score rounding.

Percentages and weighted scores round half up (58.5 -> 59), which is what
the browser client shows. Python's built-in round() rounds half to even and
would report 58.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return math.floor(value + 0.5)
