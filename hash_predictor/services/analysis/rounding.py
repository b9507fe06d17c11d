import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with halves going up.

    Python's round() uses banker's rounding (round(2.5) == 2); every score
    in this package rounds .5 towards positive infinity instead.
    """
    return math.floor(value + 0.5)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into the closed range [lower, upper]."""
    return min(upper, max(lower, value))
