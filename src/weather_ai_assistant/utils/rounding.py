"""Rounding used for every displayed measurement."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going towards positive infinity.

    Unlike the built-in ``round`` (ties to even), 4.5 becomes 5 and -2.5
    becomes -2.

    Args:
        value: Number to round.

    Returns:
        The rounded integer.
    """
    return math.floor(value + 0.5)
