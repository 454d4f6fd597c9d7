"""Price/MACD divergence detection over peaks and troughs"""

from typing import Optional, Sequence

import structlog

from ..config.defaults import DivergenceParams
from ..models.indicators import DivergenceSignal, SignalDirection

logger = structlog.get_logger(__name__)


def find_peaks(data: Sequence[float]) -> list[int]:
    """Indices strictly greater than both neighbours"""
    return [
        i for i in range(1, len(data) - 1)
        if data[i] > data[i - 1] and data[i] > data[i + 1]
    ]


def find_troughs(data: Sequence[float]) -> list[int]:
    """Indices strictly smaller than both neighbours"""
    return [
        i for i in range(1, len(data) - 1)
        if data[i] < data[i - 1] and data[i] < data[i + 1]
    ]


class DivergenceDetector:
    """
    Detects divergence between price and MACD extremes

    Stateless: every call scans the full histories it is given.
    """

    def __init__(self, params: Optional[DivergenceParams] = None):
        self.params = params or DivergenceParams()

    def detect(self, prices: Sequence[float], macd_history: Sequence[float],
               threshold: Optional[float] = None) -> DivergenceSignal:
        """
        Detect the strongest divergence between price and MACD history

        Bullish: the last two price troughs make a lower low while the last two
        MACD troughs make a higher low. Bearish: the last two price peaks make a
        higher high while the last two MACD peaks make a lower high. Bullish
        wins when strictly stronger; otherwise bearish if present.

        Args:
            prices: Close prices
            macd_history: MACD line history
            threshold: Minimum |macd% - price%| as a fraction (default 0.1)

        Returns:
            DivergenceSignal, NONE when either series is shorter than min_points
        """
        threshold = self.params.threshold if threshold is None else threshold
        min_points = self.params.min_points

        if len(prices) < min_points or len(macd_history) < min_points:
            logger.debug("Insufficient data for divergence detection",
                         prices=len(prices), macd=len(macd_history), required=min_points)
            return DivergenceSignal.none()

        bullish = self._check_divergence(
            prices, macd_history, find_troughs(prices), find_troughs(macd_history),
            threshold, SignalDirection.BULLISH,
        )
        bearish = self._check_divergence(
            prices, macd_history, find_peaks(prices), find_peaks(macd_history),
            threshold, SignalDirection.BEARISH,
        )

        if bullish.strength > bearish.strength:
            return bullish
        if bearish.strength > 0:
            return bearish

        return DivergenceSignal.none()

    def calculate_divergence_score(self, signal: DivergenceSignal) -> float:
        """
        Signed divergence score in [-100, 100]

        Positive for bullish, negative for bearish; scaled by strength and by
        the gap between price and MACD change (saturating at 10 points).
        """
        if signal.type == SignalDirection.NONE:
            return 0.0

        direction = 1 if signal.type == SignalDirection.BULLISH else -1
        strength = signal.strength / 100
        magnitude = min(abs(signal.price_change - signal.macd_change) / 10, 1.0)

        return direction * strength * magnitude * 100

    def _check_divergence(self, prices: Sequence[float], macd: Sequence[float],
                          price_points: list[int], macd_points: list[int],
                          threshold: float, direction: SignalDirection) -> DivergenceSignal:
        if len(price_points) < 2 or len(macd_points) < 2:
            return DivergenceSignal.none()

        prev_price, last_price = price_points[-2], price_points[-1]
        prev_macd, last_macd = macd_points[-2], macd_points[-1]

        if direction == SignalDirection.BULLISH:
            diverging = (prices[last_price] < prices[prev_price] and
                         macd[last_macd] > macd[prev_macd])
        else:
            diverging = (prices[last_price] > prices[prev_price] and
                         macd[last_macd] < macd[prev_macd])

        if not diverging or prices[prev_price] == 0 or macd[prev_macd] == 0:
            return DivergenceSignal.none()

        price_change = (prices[last_price] - prices[prev_price]) / prices[prev_price]
        macd_change = (macd[last_macd] - macd[prev_macd]) / abs(macd[prev_macd])
        strength = abs(macd_change - price_change)

        if strength <= threshold:
            return DivergenceSignal.none()

        return DivergenceSignal(
            type=direction,
            strength=min(strength * 100, 100.0),
            start_index=prev_price,
            end_index=last_price,
            price_change=price_change * 100,
            macd_change=macd_change * 100,
        )
