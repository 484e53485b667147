"""Maintainability index and small numeric helpers."""

import math
from collections.abc import Iterable

import numpy as np

MI_MIN = 0.0
MI_MAX = 100.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for no values."""
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def maintainability_index(lines: int, cyclomatic: int, halstead_volume: float) -> float:
    """Compute the maintainability index on a 0-100 scale.

    MI = 171 - 5.2 * ln(H) - 0.23 * C - 16.2 * ln(LOC)

    Where H is the mean Halstead volume, C the total cyclomatic complexity
    and LOC the total line count. H and LOC are floored at 1 so empty
    inputs stay finite; the result is clamped to [0, 100] and rounded to
    2 decimals.
    """
    h = max(halstead_volume, 1.0)
    loc = max(lines, 1)
    mi = 171.0 - 5.2 * math.log(h) - 0.23 * cyclomatic - 16.2 * math.log(loc)
    return round(clamp(mi, MI_MIN, MI_MAX), 2)
