"""Per-token analysis report"""

from dataclasses import dataclass
from typing import Optional

from .indicators import DivergenceSignal, MACDResult, MarketRegime
from .statistics import StatisticalMetrics


@dataclass(frozen=True)
class TokenAnalysis:
    """Everything the dashboard renders for one token and interval"""
    token_address: str
    interval: str
    candle_count: int
    last_price: Optional[float]
    indicators: MACDResult
    signal_strength: float
    momentum: float
    statistics: StatisticalMetrics
    regime: MarketRegime
    divergence: DivergenceSignal
    divergence_score: float

    @property
    def has_data(self) -> bool:
        return self.candle_count > 0
