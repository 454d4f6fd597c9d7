"""Statistical analyzer bundling the risk statistics under one parameter set"""

from typing import Optional, Sequence

import structlog

from ..config.defaults import StatisticsParams
from ..models.statistics import DistributionStats, StatisticalMetrics
from .correlation import CorrelationAnalyzer
from .distribution import (
    calculate_distribution_stats,
    calculate_returns,
    calculate_z_score,
    mean,
    std_dev,
)
from .ratios import (
    calculate_calmar_ratio,
    calculate_information_ratio,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
)
from .risk import (
    calculate_cvar,
    calculate_kelly_criterion,
    calculate_max_drawdown,
    calculate_var,
)

logger = structlog.get_logger(__name__)


class StatisticalAnalyzer:
    """
    Risk and performance statistics over return and price series

    Every method is pure: identical input always produces identical output.
    Degenerate input (short series, zero deviation) yields 0.
    """

    def __init__(self, params: Optional[StatisticsParams] = None,
                 correlation_analyzer: Optional[CorrelationAnalyzer] = None):
        self.params = params or StatisticsParams()
        self.correlation_analyzer = correlation_analyzer or CorrelationAnalyzer()

    def calculate_sharpe_ratio(self, returns: Sequence[float],
                               risk_free_rate: Optional[float] = None,
                               periods: Optional[int] = None) -> float:
        return calculate_sharpe_ratio(
            returns,
            self.params.risk_free_rate if risk_free_rate is None else risk_free_rate,
            self.params.periods_per_year if periods is None else periods,
        )

    def calculate_sortino_ratio(self, returns: Sequence[float],
                                risk_free_rate: Optional[float] = None,
                                periods: Optional[int] = None) -> float:
        return calculate_sortino_ratio(
            returns,
            self.params.risk_free_rate if risk_free_rate is None else risk_free_rate,
            self.params.periods_per_year if periods is None else periods,
        )

    def calculate_var(self, returns: Sequence[float],
                      confidence_level: Optional[float] = None) -> float:
        return calculate_var(
            returns,
            self.params.var_confidence if confidence_level is None else confidence_level,
        )

    def calculate_cvar(self, returns: Sequence[float],
                       confidence_level: Optional[float] = None) -> float:
        return calculate_cvar(
            returns,
            self.params.var_confidence if confidence_level is None else confidence_level,
        )

    def calculate_max_drawdown(self, prices: Sequence[float]) -> float:
        return calculate_max_drawdown(prices)

    def calculate_kelly_criterion(self, win_rate: float, avg_win: float, avg_loss: float) -> float:
        return calculate_kelly_criterion(win_rate, avg_win, avg_loss, self.params.max_kelly_pct)

    def calculate_z_score(self, value: float, data: Sequence[float]) -> float:
        return calculate_z_score(value, data)

    def calculate_calmar_ratio(self, returns: Sequence[float], max_drawdown: float,
                               periods: Optional[int] = None) -> float:
        return calculate_calmar_ratio(
            returns,
            max_drawdown,
            self.params.periods_per_year if periods is None else periods,
        )

    def calculate_information_ratio(self, returns: Sequence[float],
                                    benchmark_returns: Sequence[float]) -> float:
        return calculate_information_ratio(returns, benchmark_returns)

    def calculate_correlation_matrix(self, datasets: Sequence[Sequence[float]]) -> list[list[float]]:
        return self.correlation_analyzer.calculate_matrix(datasets).matrix

    def calculate_volatility(self, returns: Sequence[float]) -> float:
        """Population standard deviation of returns"""
        return std_dev(returns)

    def calculate_distribution(self, data: Sequence[float]) -> DistributionStats:
        return calculate_distribution_stats(data)

    def calculate_return_kelly(self, returns: Sequence[float]) -> float:
        """
        Kelly percent implied by the sign split of a return series

        Win rate is the share of positive returns; average win and loss are the
        means of the positive and negative returns.
        """
        if len(returns) < 2:
            return 0.0

        wins = [r for r in returns if r > 0]
        losses = [r for r in returns if r < 0]
        if not wins or not losses:
            return 0.0

        return self.calculate_kelly_criterion(len(wins) / len(returns), mean(wins), mean(losses))

    def calculate_all_metrics(self, prices: Sequence[float],
                              returns: Optional[Sequence[float]] = None,
                              datasets: Optional[Sequence[Sequence[float]]] = None) -> StatisticalMetrics:
        """
        Calculate the full StatisticalMetrics bundle

        Args:
            prices: Close prices (drawdown input)
            returns: Per-period returns, derived from prices when omitted
            datasets: Series for the correlation matrix; [[1.0]] when omitted

        Returns:
            StatisticalMetrics
        """
        if returns is None:
            returns = calculate_returns(prices)

        if len(returns) < 2:
            logger.debug("Insufficient returns for statistics", available=len(returns))

        correlation = self.calculate_correlation_matrix(datasets) if datasets else [[1.0]]

        return StatisticalMetrics(
            sharpe_ratio=self.calculate_sharpe_ratio(returns),
            sortino_ratio=self.calculate_sortino_ratio(returns),
            value_at_risk=self.calculate_var(returns),
            max_drawdown=self.calculate_max_drawdown(prices),
            kelly_criterion=self.calculate_return_kelly(returns),
            z_score=self.calculate_z_score(returns[-1], returns) if returns else 0.0,
            correlation=correlation,
        )
