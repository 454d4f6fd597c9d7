"""Statistics and performance value objects"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StatisticalMetrics:
    """Risk statistics for a price/return series"""
    sharpe_ratio: float
    sortino_ratio: float
    value_at_risk: float                            # Percent
    max_drawdown: float                             # Percent
    kelly_criterion: float                          # Percent, always in [0, 25]
    z_score: float
    correlation: list[list[float]] = field(default_factory=lambda: [[1.0]])


@dataclass(frozen=True)
class DistributionStats:
    """Moments and location statistics of a sample"""
    mean: float
    median: float
    mode: float
    variance: float
    std_dev: float
    skewness: float
    kurtosis: float                                 # Excess kurtosis


@dataclass(frozen=True)
class PerformanceMetrics:
    """Aggregate backtest performance over closed trades and equity"""
    total_return: float = 0.0                       # Percent
    annualized_return: float = 0.0
    max_drawdown: float = 0.0                       # Percent of equity peak
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    volatility: float = 0.0                         # Percent per bar
    var_95: float = 0.0
    var_99: float = 0.0
    cvar_95: float = 0.0
    win_rate: float = 0.0                           # Percent
    profit_factor: float = 0.0
    kelly_criterion: float = 0.0
    avg_win: float = 0.0                            # Percent per trade
    avg_loss: float = 0.0
    max_win: float = 0.0
    max_loss: float = 0.0
    calmar_ratio: float = 0.0
    total_trades: int = 0
