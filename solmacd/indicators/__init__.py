"""Moving-average based indicators"""

from .ema import EMACalculator, calculate_ema, calculate_ema_series, calculate_sma
from .macd import MACDCalculator

__all__ = [
    "EMACalculator",
    "MACDCalculator",
    "calculate_ema",
    "calculate_ema_series",
    "calculate_sma",
]
