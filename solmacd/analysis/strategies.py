"""Built-in MACD trading strategies for the backtest engine"""

from typing import Callable, Optional

from ..errors import ConfigurationError
from ..indicators.macd import MACDCalculator
from ..models.indicators import MACDResult, SignalDirection
from ..models.trading import TradeAction


class MACDCrossoverStrategy:
    """BUY on a bullish MACD/signal crossover, SELL on a bearish one"""

    def __init__(self) -> None:
        self._previous: Optional[MACDResult] = None

    def __call__(self, macd: MACDResult, price: float) -> TradeAction:
        if not macd.has_history:
            return TradeAction.HOLD

        crossover = MACDCalculator.detect_crossover(macd, self._previous)
        self._previous = macd

        if crossover == SignalDirection.BULLISH:
            return TradeAction.BUY
        if crossover == SignalDirection.BEARISH:
            return TradeAction.SELL
        return TradeAction.HOLD

    def reset(self) -> None:
        self._previous = None


def histogram_strategy(macd: MACDResult, price: float) -> TradeAction:
    """Long while the histogram is positive, flat while it is negative"""
    if not macd.has_history:
        return TradeAction.HOLD
    if macd.histogram > 0:
        return TradeAction.BUY
    if macd.histogram < 0:
        return TradeAction.SELL
    return TradeAction.HOLD


class MomentumStrategy:
    """Histogram direction, acted on only when the composite signal strength is high enough"""

    def __init__(self, min_strength: float = 20.0):
        self.min_strength = min_strength

    def __call__(self, macd: MACDResult, price: float) -> TradeAction:
        if not macd.has_history:
            return TradeAction.HOLD
        if MACDCalculator.validate_signal_strength(macd) < self.min_strength:
            return TradeAction.HOLD
        return histogram_strategy(macd, price)


STRATEGIES: dict[str, Callable[[], Callable[[MACDResult, float], TradeAction]]] = {
    "MACD_CROSSOVER": MACDCrossoverStrategy,
    "HISTOGRAM": lambda: histogram_strategy,
    "MOMENTUM": MomentumStrategy,
}


def get_strategy(name: str) -> Callable[[MACDResult, float], TradeAction]:
    """
    Build a fresh strategy instance by name

    Raises:
        ConfigurationError: If the name is not registered
    """
    factory = STRATEGIES.get(name.upper())
    if factory is None:
        raise ConfigurationError(
            f"Unknown strategy: {name}",
            field="strategy",
            value=name,
            context={"available": sorted(STRATEGIES)},
        )
    return factory()
