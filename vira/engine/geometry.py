"""Interval and grid arithmetic shared by the scheduler and the layout engine"""

import math
from typing import Any, Union

Number = Union[int, float]


def intervals_overlap(a_start: Any, a_end: Any, b_start: Any, b_end: Any) -> bool:
    """Half-open ``[start, end)`` overlap; touching endpoints do not overlap"""
    return a_start < b_end and b_start < a_end


def snap_to_grid(value: Number, grid_size: Number) -> Number:
    """Round ``value`` to the nearest multiple of ``grid_size``.

    Halves round up (towards positive infinity), so 12 snaps to 24 and -12
    snaps to 0 on a 24 grid.
    """
    if grid_size <= 0:
        raise ValueError("grid_size must be positive")
    return math.floor(value / grid_size + 0.5) * grid_size


def clamp(value: Number, minimum: Number, maximum: Number) -> Number:
    """Clamp into ``[minimum, maximum]``; ``minimum`` wins when the range is empty"""
    return max(minimum, min(value, maximum))
