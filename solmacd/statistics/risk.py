"""Tail risk, drawdown and position sizing"""

import math
from typing import Sequence

from .distribution import mean


def calculate_var(returns: Sequence[float], confidence_level: float = 0.95) -> float:
    """
    Empirical Value at Risk in percent

    Sorts returns ascending and reads the element at
    floor((1 - confidence_level) * n). Losses are reported as positive
    percentages; a non-negative quantile means no loss at that level (0).
    Unlike abs(quantile), a gain quantile is never reported as a loss, so
    VaR is non-decreasing in confidence_level.

    Returns:
        VaR percent, 0 for fewer than 2 returns
    """
    if len(returns) < 2:
        return 0.0

    ordered = sorted(returns)
    index = math.floor((1 - confidence_level) * len(ordered))
    index = min(max(index, 0), len(ordered) - 1)

    return max(-ordered[index], 0.0) * 100


def calculate_cvar(returns: Sequence[float], confidence_level: float = 0.95) -> float:
    """
    Conditional VaR (expected shortfall) in percent

    Mean of all returns at or below -VaR, as a positive percentage. Falls back
    to VaR when that tail is empty.
    """
    if len(returns) < 2:
        return 0.0

    var = calculate_var(returns, confidence_level) / 100
    tail = [r for r in returns if r <= -var]

    if not tail:
        return var * 100

    return abs(mean(tail)) * 100


def calculate_max_drawdown(prices: Sequence[float]) -> float:
    """
    Maximum peak-to-trough decline in percent

    Tracks the running peak; drawdown at i is (peak - price_i) / peak.

    Returns:
        Max drawdown percent, 0 for fewer than 2 prices
    """
    if len(prices) < 2:
        return 0.0

    max_dd = 0.0
    peak = prices[0]

    for price in prices[1:]:
        if price > peak:
            peak = price
        if peak <= 0:
            continue
        drawdown = (peak - price) / peak
        if drawdown > max_dd:
            max_dd = drawdown

    return max_dd * 100


def calculate_kelly_criterion(
    win_rate: float,
    avg_win: float,
    avg_loss: float,
    max_kelly_pct: float = 25.0
) -> float:
    """
    Kelly optimal bet fraction in percent, capped for safety

    b = avg_win / |avg_loss|, kelly = (p * b - q) / b with q = 1 - p.

    Args:
        win_rate: Probability of a winning trade (0-1)
        avg_win: Average win magnitude
        avg_loss: Average loss magnitude (sign ignored)
        max_kelly_pct: Upper clamp in percent

    Returns:
        Kelly percent clamped to [0, max_kelly_pct]; 0 if avg_loss is 0
    """
    if avg_loss == 0:
        return 0.0

    b = avg_win / abs(avg_loss)
    if not math.isfinite(b) or b <= 0 or not math.isfinite(win_rate):
        return 0.0

    p = win_rate
    q = 1 - p
    kelly = (p * b - q) / b

    return max(0.0, min(kelly * 100, max_kelly_pct))


def calculate_fractional_kelly(
    win_rate: float,
    avg_win: float,
    avg_loss: float,
    fraction: float = 0.5
) -> float:
    """Kelly percent scaled by fraction (half-Kelly by default)."""
    return calculate_kelly_criterion(win_rate, avg_win, avg_loss) * fraction
