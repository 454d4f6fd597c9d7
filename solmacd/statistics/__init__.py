"""Return-series statistics: distribution, risk-adjusted ratios, tail risk and correlation"""

from .analyzer import StatisticalAnalyzer
from .correlation import CorrelationAnalyzer, CorrelationRegime
from .distribution import (
    calculate_distribution_stats,
    calculate_modified_z_score,
    calculate_returns,
    calculate_z_score,
)
from .ratios import (
    calculate_calmar_ratio,
    calculate_information_ratio,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
)
from .risk import (
    calculate_cvar,
    calculate_fractional_kelly,
    calculate_kelly_criterion,
    calculate_max_drawdown,
    calculate_var,
)

__all__ = [
    "StatisticalAnalyzer",
    "CorrelationAnalyzer",
    "CorrelationRegime",
    "calculate_distribution_stats",
    "calculate_modified_z_score",
    "calculate_returns",
    "calculate_z_score",
    "calculate_calmar_ratio",
    "calculate_information_ratio",
    "calculate_sharpe_ratio",
    "calculate_sortino_ratio",
    "calculate_cvar",
    "calculate_fractional_kelly",
    "calculate_kelly_criterion",
    "calculate_max_drawdown",
    "calculate_var",
]
