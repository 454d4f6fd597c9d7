"""Signal analysis: regime, divergence, backtesting and strategies"""

from .backtest import BacktestEngine
from .divergence import DivergenceDetector
from .regime import RegimeDetector
from .strategies import MACDCrossoverStrategy, MomentumStrategy, get_strategy, histogram_strategy

__all__ = [
    "BacktestEngine",
    "DivergenceDetector",
    "RegimeDetector",
    "MACDCrossoverStrategy",
    "MomentumStrategy",
    "get_strategy",
    "histogram_strategy",
]
