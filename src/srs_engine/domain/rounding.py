"""Half-up rounding for schedule and report values.

Python's built-in round() rounds ties to even, so round(16.5) is 16.
Scheduling and analytics round ties up instead, so 16.5 becomes 17.
"""

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round `value` to `ndigits` decimals with ties rounded up.

    With ndigits=0 the result is an int.
    """
    if ndigits == 0:
        return math.floor(value + 0.5)
    scale = 10**ndigits
    return math.floor(value * scale + 0.5) / scale
