"""MACD (Moving Average Convergence Divergence) calculations"""

import math
from typing import Callable, Optional, Sequence

import structlog

from ..data.models import Candle
from ..models.indicators import MACDResult, SignalDirection
from ..utils.math import clamp
from ..utils.time import now_ms
from .ema import calculate_ema_series

logger = structlog.get_logger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class MACDCalculator:
    """
    MACD calculator over a close-price series

    Each call recomputes from scratch; no state is carried between calls.
    """

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9,
                 min_vol_multiplier: float = 0.5, max_vol_multiplier: float = 2.0,
                 clock: Optional[Callable[[], float]] = None):
        self.fast_period = fast_period
        self.slow_period = slow_period
        self.signal_period = signal_period
        self.min_vol_multiplier = min_vol_multiplier
        self.max_vol_multiplier = max_vol_multiplier
        self._clock = clock

    @property
    def min_length(self) -> int:
        """Shortest price series that yields a non-degenerate result"""
        return self.slow_period + self.signal_period

    def calculate(self, prices: Sequence[float], timestamp: Optional[int] = None) -> MACDResult:
        """
        Calculate MACD, signal and histogram

        Args:
            prices: Close prices in chronological order
            timestamp: Result timestamp in epoch ms, defaults to now

        Returns:
            MACDResult whose histories are aligned and start at the first bar
            with a valid signal value; zeroed with empty histories if
            prices is shorter than slow_period + signal_period
        """
        stamp = timestamp if timestamp is not None else now_ms(self._clock)

        if len(prices) < self.min_length:
            logger.debug(
                "Insufficient prices for MACD",
                required=self.min_length,
                available=len(prices),
            )
            return MACDResult.empty(stamp)

        fast = calculate_ema_series(prices, self.fast_period)
        slow = calculate_ema_series(prices, self.slow_period)

        macd_line = [fast[i] - slow[i] for i in range(self.slow_period - 1, len(prices))]

        signal_line = calculate_ema_series(macd_line, self.signal_period)[self.signal_period - 1:]
        macd_history = macd_line[self.signal_period - 1:]
        histogram = [m - s for m, s in zip(macd_history, signal_line)]

        return MACDResult(
            macd=macd_history[-1],
            signal=signal_line[-1],
            histogram=histogram[-1],
            timestamp=stamp,
            macd_history=tuple(macd_history),
            signal_history=tuple(signal_line),
            histogram_history=tuple(histogram),
        )

    def calculate_from_candles(self, candles: Sequence[Candle],
                               timestamp: Optional[int] = None) -> MACDResult:
        """Calculate MACD over candle closes"""
        return self.calculate([c.close for c in candles], timestamp)

    def calculate_adaptive(self, prices: Sequence[float], volatility: float,
                           timestamp: Optional[int] = None) -> MACDResult:
        """
        Calculate MACD with fast/slow periods scaled by volatility

        The multiplier is the volatility clamped to [0.5, 2.0]; the signal
        period is unchanged.
        """
        multiplier = clamp(volatility, self.min_vol_multiplier, self.max_vol_multiplier)
        adaptive = MACDCalculator(
            fast_period=_round_half_up(self.fast_period * multiplier),
            slow_period=_round_half_up(self.slow_period * multiplier),
            signal_period=self.signal_period,
            min_vol_multiplier=self.min_vol_multiplier,
            max_vol_multiplier=self.max_vol_multiplier,
            clock=self._clock,
        )
        return adaptive.calculate(prices, timestamp)

    @staticmethod
    def detect_crossover(current: Optional[MACDResult],
                         previous: Optional[MACDResult]) -> SignalDirection:
        """
        Detect MACD/signal crossovers between two consecutive results

        Returns:
            BULLISH when macd - signal flips from negative to positive,
            BEARISH on the opposite flip, NONE otherwise
        """
        if current is None or previous is None:
            return SignalDirection.NONE

        prev_diff = previous.macd - previous.signal
        curr_diff = current.macd - current.signal

        if prev_diff < 0 < curr_diff:
            return SignalDirection.BULLISH
        if prev_diff > 0 > curr_diff:
            return SignalDirection.BEARISH

        return SignalDirection.NONE

    @staticmethod
    def calculate_momentum(macd_history: Sequence[float]) -> float:
        """
        Percent change between the mean of the last 10 MACD values and the
        mean of the 10 before them

        Returns:
            Momentum in percent, 0 when there is no earlier window or its mean is 0
        """
        if len(macd_history) < 2:
            return 0.0

        recent = macd_history[-10:]
        older = macd_history[-20:-10]
        if len(older) == 0:
            return 0.0

        recent_avg = sum(recent) / len(recent)
        old_avg = sum(older) / len(older)
        if old_avg == 0:
            return 0.0

        return (recent_avg - old_avg) / abs(old_avg) * 100

    @staticmethod
    def validate_signal_strength(result: MACDResult) -> float:
        """
        Composite signal strength score (0-100)

        Histogram magnitude contributes up to 50, MACD magnitude up to 30 and
        MACD/signal separation up to 20.
        """
        histogram_strength = min(abs(result.histogram) * 1000, 50.0)
        macd_strength = min(abs(result.macd) * 100, 30.0)
        divergence_strength = min(abs(result.macd - result.signal) * 100, 20.0)

        return min(histogram_strength + macd_strength + divergence_strength, 100.0)
