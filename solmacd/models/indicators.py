"""Indicator and signal value objects"""

from dataclasses import dataclass
from enum import Enum


class SignalDirection(str, Enum):
    """Direction of a crossover or divergence signal."""
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NONE = "NONE"


class Regime(str, Enum):
    """Qualitative market state."""
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"
    TRANSITION = "TRANSITION"


@dataclass(frozen=True)
class MACDResult:
    """MACD values for the latest bar plus aligned histories"""
    macd: float
    signal: float
    histogram: float
    timestamp: int                                  # Epoch ms when computed
    macd_history: tuple[float, ...] = ()
    signal_history: tuple[float, ...] = ()
    histogram_history: tuple[float, ...] = ()

    @classmethod
    def empty(cls, timestamp: int) -> "MACDResult":
        """Zeroed result returned when the series is too short."""
        return cls(macd=0.0, signal=0.0, histogram=0.0, timestamp=timestamp)

    @property
    def has_history(self) -> bool:
        """False for the degenerate result of an insufficient series"""
        return len(self.histogram_history) > 0


@dataclass(frozen=True)
class MarketRegime:
    """Regime classification with confidence in [0, 100]"""
    regime: Regime
    confidence: float
    trend: float                                    # Percent distance from reference EMA
    volatility: float                               # Return std in percent

    @classmethod
    def neutral(cls) -> "MarketRegime":
        return cls(regime=Regime.NEUTRAL, confidence=0.0, trend=0.0, volatility=0.0)


@dataclass(frozen=True)
class DivergenceSignal:
    """Price/MACD divergence between two consecutive peaks or troughs"""
    type: SignalDirection
    strength: float                                 # 0-100
    start_index: int
    end_index: int
    price_change: float                             # Percent
    macd_change: float                              # Percent

    @classmethod
    def none(cls) -> "DivergenceSignal":
        return cls(
            type=SignalDirection.NONE,
            strength=0.0,
            start_index=0,
            end_index=0,
            price_change=0.0,
            macd_change=0.0,
        )
