"""Rounding helpers for the scoring heuristics."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward positive infinity.

    round_half_up(2.5) == 3 and round_half_up(-2.5) == -2, unlike the
    built-in round() which rounds halves to even.
    """
    return math.floor(value + 0.5)
