"""EMA (Exponential Moving Average) calculations"""

from typing import Sequence


def calculate_sma(data: Sequence[float]) -> float:
    """Simple average of all values, 0 for empty input."""
    if len(data) == 0:
        return 0.0
    return sum(data) / len(data)


def calculate_ema(data: Sequence[float], period: int) -> float:
    """
    Calculate the final EMA value of a series

    Seeds with the SMA of the first `period` values, then applies
    k = 2 / (period + 1) over the remainder.

    Args:
        data: Values in chronological order
        period: EMA period

    Returns:
        Final EMA value, or 0 if period <= 0 or data is shorter than period
    """
    if period <= 0 or len(data) < period:
        return 0.0

    k = 2 / (period + 1)
    ema = calculate_sma(data[:period])

    for price in data[period:]:
        ema = price * k + ema * (1 - k)

    return ema


def calculate_ema_series(data: Sequence[float], period: int) -> list[float]:
    """
    EMA of every prefix of data, computed in one pass

    Element i equals calculate_ema(data[:i + 1], period): 0 before the seed
    index period - 1, the SMA seed at it, the running recurrence after it.

    Args:
        data: Values in chronological order
        period: EMA period

    Returns:
        List aligned with data
    """
    if period <= 0:
        return [0.0] * len(data)
    if len(data) < period:
        return [0.0] * len(data)

    k = 2 / (period + 1)
    series = [0.0] * (period - 1)
    ema = calculate_sma(data[:period])
    series.append(ema)

    for price in data[period:]:
        ema = price * k + ema * (1 - k)
        series.append(ema)

    return series


def calculate_ema_with_alpha(data: Sequence[float], alpha: float) -> float:
    """EMA with a custom smoothing factor, seeded with the first value."""
    if len(data) == 0:
        return 0.0

    ema = data[0]
    for price in data[1:]:
        ema = price * alpha + ema * (1 - alpha)

    return ema


def calculate_incremental_ema(previous_ema: float, current_price: float, period: int) -> float:
    """Single-step EMA update for streaming prices."""
    if period <= 0:
        return 0.0
    k = 2 / (period + 1)
    return current_price * k + previous_ema * (1 - k)


class EMACalculator:
    """EMA calculator exposing single-value, series and multi-period helpers"""

    def calculate(self, data: Sequence[float], period: int) -> float:
        return calculate_ema(data, period)

    def calculate_series(self, data: Sequence[float], period: int) -> list[float]:
        return calculate_ema_series(data, period)

    def calculate_with_alpha(self, data: Sequence[float], alpha: float) -> float:
        return calculate_ema_with_alpha(data, alpha)

    def calculate_incremental(self, previous_ema: float, current_price: float, period: int) -> float:
        return calculate_incremental_ema(previous_ema, current_price, period)

    def calculate_multiple(self, data: Sequence[float], periods: Sequence[int]) -> dict[int, float]:
        """Final EMA value for each requested period"""
        return {period: calculate_ema(data, period) for period in periods}

    def calculate_dema(self, data: Sequence[float], period: int) -> float:
        """
        Double EMA: 2 * EMA - EMA(EMA)

        The inner EMA series includes the zero placeholders before the seed
        index, so DEMA needs roughly twice the period to settle.
        """
        ema1 = calculate_ema(data, period)
        ema_of_ema = calculate_ema(calculate_ema_series(data, period), period)
        return 2 * ema1 - ema_of_ema

    def calculate_tema(self, data: Sequence[float], period: int) -> float:
        """Triple EMA: 3 * EMA - 3 * EMA(EMA) + EMA(EMA(EMA))"""
        first = calculate_ema_series(data, period)
        second = calculate_ema_series(first, period)

        ema1 = first[-1] if first else 0.0
        ema2 = second[-1] if second else 0.0
        ema3 = calculate_ema(second, period)

        return 3 * ema1 - 3 * ema2 + ema3
