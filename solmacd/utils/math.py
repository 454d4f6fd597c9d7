"""Small numeric helpers shared across the analysis core."""

import math
from typing import Sequence


def percent_change(current: float, previous: float) -> float:
    """Percentage change from previous to current, 0 if previous is 0."""
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def calculate_cagr(begin_value: float, end_value: float, periods: float) -> float:
    """Compound annual growth rate in percent."""
    if begin_value <= 0 or periods <= 0:
        return 0.0
    return (math.pow(end_value / begin_value, 1 / periods) - 1) * 100


def normalize(value: float, minimum: float, maximum: float) -> float:
    """Scale value into the 0-1 range given the bounds."""
    if maximum == minimum:
        return 0.0
    return (value - minimum) / (maximum - minimum)


def moving_average(data: Sequence[float], period: int) -> list[float]:
    """
    Simple moving average aligned with the input.

    Indices before the first full window hold NaN.
    """
    result = []
    running = 0.0
    for i, value in enumerate(data):
        running += value
        if i >= period:
            running -= data[i - period]
        if i < period - 1:
            result.append(math.nan)
        else:
            result.append(running / period)
    return result


def percentile(data: Sequence[float], p: float) -> float:
    """
    Linearly interpolated percentile.

    Args:
        data: Values to rank
        p: Percentile in 0-100

    Returns:
        Interpolated value, 0 for empty input
    """
    if len(data) == 0:
        return 0.0

    ordered = sorted(data)
    index = (p / 100) * (len(ordered) - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    weight = index - lower

    if lower == upper:
        return ordered[lower]

    return ordered[lower] * (1 - weight) + ordered[upper] * weight


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value between minimum and maximum."""
    return min(max(value, minimum), maximum)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def safe_divide(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    """Divide, returning fallback when the denominator is zero."""
    return numerator / denominator if denominator != 0 else fallback
