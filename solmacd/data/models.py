"""
Canonical data models for candle series.

Candles are immutable and a PriceSeries keeps them in chronological order,
exposing the derived close, volume and return arrays the numeric core needs.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Union, overload


@dataclass(frozen=True)
class Candle:
    """OHLCV candle with an epoch-millisecond timestamp."""
    timestamp: int      # Candle open time, epoch ms
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class PriceSeries:
    """Chronologically ordered candles; insertion order is time order."""

    candles: tuple[Candle, ...] = ()

    @classmethod
    def from_candles(cls, candles: Sequence[Candle]) -> "PriceSeries":
        return cls(candles=tuple(candles))

    @classmethod
    def from_closes(cls, closes: Sequence[float], start_ms: int = 0,
                    interval_ms: int = 60_000,
                    volumes: Optional[Sequence[float]] = None) -> "PriceSeries":
        """Build flat candles (open=high=low=close) from a close series."""
        candles = []
        for i, close in enumerate(closes):
            volume = volumes[i] if volumes is not None else 0.0
            candles.append(Candle(
                timestamp=start_ms + i * interval_ms,
                open=close,
                high=close,
                low=close,
                close=close,
                volume=volume,
            ))
        return cls(candles=tuple(candles))

    @property
    def closes(self) -> list[float]:
        return [c.close for c in self.candles]

    @property
    def volumes(self) -> list[float]:
        return [c.volume for c in self.candles]

    @property
    def timestamps(self) -> list[int]:
        return [c.timestamp for c in self.candles]

    @property
    def returns(self) -> list[float]:
        """Simple returns, one shorter than closes."""
        closes = self.closes
        return [
            (closes[i + 1] - closes[i]) / closes[i] if closes[i] != 0 else 0.0
            for i in range(len(closes) - 1)
        ]

    @property
    def last_close(self) -> Optional[float]:
        return self.candles[-1].close if self.candles else None

    def __len__(self) -> int:
        return len(self.candles)

    def __iter__(self) -> Iterator[Candle]:
        return iter(self.candles)

    @overload
    def __getitem__(self, index: int) -> Candle: ...

    @overload
    def __getitem__(self, index: slice) -> "PriceSeries": ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Candle, "PriceSeries"]:
        if isinstance(index, slice):
            return PriceSeries(candles=self.candles[index])
        return self.candles[index]
