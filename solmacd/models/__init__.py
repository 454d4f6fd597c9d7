"""
Value objects produced by the analysis core.

Every object is recomputed per request and owned by the call that produced
it; none carries persistent identity.
"""

from .indicators import (
    DivergenceSignal,
    MACDResult,
    MarketRegime,
    Regime,
    SignalDirection,
)
from .report import TokenAnalysis
from .statistics import DistributionStats, PerformanceMetrics, StatisticalMetrics
from .trading import (
    BacktestResult,
    PositionSide,
    Trade,
    TradeAction,
    WalkForwardResult,
)

__all__ = [
    "DivergenceSignal",
    "MACDResult",
    "MarketRegime",
    "Regime",
    "SignalDirection",
    "DistributionStats",
    "PerformanceMetrics",
    "StatisticalMetrics",
    "TokenAnalysis",
    "BacktestResult",
    "PositionSide",
    "Trade",
    "TradeAction",
    "WalkForwardResult",
]
