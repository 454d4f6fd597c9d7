"""Risk-adjusted return ratios (Sharpe, Sortino, Calmar, Information)"""

import math
from typing import Sequence

from ..errors import MalformedDataError
from .distribution import is_zero, mean, std_dev


def calculate_sharpe_ratio(
    returns: Sequence[float],
    risk_free_rate: float = 0.02,
    periods: int = 252
) -> float:
    """
    Calculate annualized Sharpe Ratio

    (mean * periods - risk_free_rate) / (std * sqrt(periods))

    Args:
        returns: Per-period simple returns
        risk_free_rate: Annual risk-free rate
        periods: Periods per year

    Returns:
        Sharpe ratio, 0 for fewer than 2 returns or zero deviation
    """
    if len(returns) < 2:
        return 0.0

    deviation = std_dev(returns)
    if is_zero(deviation):
        return 0.0

    annualized_return = mean(returns) * periods
    annualized_std = deviation * math.sqrt(periods)

    return (annualized_return - risk_free_rate) / annualized_std


def calculate_sortino_ratio(
    returns: Sequence[float],
    risk_free_rate: float = 0.02,
    periods: int = 252
) -> float:
    """
    Calculate annualized Sortino Ratio

    Same numerator as Sharpe; the denominator is the root-mean-square of the
    negative returns only, annualized.

    Returns:
        Sortino ratio; +inf when there are no negative returns and the mean
        return exceeds the risk-free rate, 0 when there are none otherwise
    """
    if len(returns) < 2:
        return 0.0

    avg = mean(returns)
    downside = [r for r in returns if r < 0]

    if not downside:
        return math.inf if avg > risk_free_rate else 0.0

    downside_deviation = math.sqrt(math.fsum(r * r for r in downside) / len(downside))
    if is_zero(downside_deviation):
        return 0.0

    annualized_return = avg * periods
    annualized_downside = downside_deviation * math.sqrt(periods)

    return (annualized_return - risk_free_rate) / annualized_downside


def calculate_calmar_ratio(
    returns: Sequence[float],
    max_drawdown: float,
    periods: int = 252
) -> float:
    """
    Annualized mean return divided by max drawdown

    Args:
        returns: Per-period simple returns
        max_drawdown: Max drawdown in percent
        periods: Periods per year

    Returns:
        Calmar ratio, 0 when drawdown is 0 or fewer than 2 returns
    """
    if len(returns) < 2 or max_drawdown == 0:
        return 0.0

    annualized_return = mean(returns) * periods
    return annualized_return / (max_drawdown / 100)


def calculate_information_ratio(
    returns: Sequence[float],
    benchmark_returns: Sequence[float]
) -> float:
    """
    Mean excess return over the benchmark divided by tracking error

    Raises:
        MalformedDataError: If the series lengths differ
    """
    if len(returns) != len(benchmark_returns):
        raise MalformedDataError(
            "Return and benchmark series must have equal length",
            expected_format=f"{len(returns)} values",
            context={"returns": len(returns), "benchmark": len(benchmark_returns)},
        )

    if len(returns) < 2:
        return 0.0

    excess = [r - b for r, b in zip(returns, benchmark_returns)]
    tracking_error = std_dev(excess)
    if is_zero(tracking_error):
        return 0.0

    return mean(excess) / tracking_error
