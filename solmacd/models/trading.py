"""Trade and backtest result value objects"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .statistics import PerformanceMetrics


class TradeAction(str, Enum):
    """Decision returned by a strategy for one bar."""
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class PositionSide(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"


@dataclass
class Trade:
    """
    Simulated trade.

    Created open on an entry signal and closed exactly once on exit signal,
    stop loss, take profit or end of data.
    """
    entry_time: int
    entry_price: float
    position: PositionSide
    size: float
    exit_time: Optional[int] = None
    exit_price: Optional[float] = None
    pnl: Optional[float] = None
    pnl_percent: Optional[float] = None
    is_open: bool = True

    def close(self, exit_time: int, exit_price: float, pnl: float,
              pnl_percent: Optional[float] = None) -> None:
        """Mark the trade closed; a closed trade is never reopened."""
        if not self.is_open:
            raise ValueError("Trade is already closed")

        self.exit_time = exit_time
        self.exit_price = exit_price
        self.pnl = pnl
        if pnl_percent is None:
            notional = self.entry_price * self.size
            pnl_percent = pnl / notional * 100 if notional else 0.0
        self.pnl_percent = pnl_percent
        self.is_open = False


@dataclass
class BacktestResult:
    """Trade log, per-bar equity curve and derived metrics of one run"""
    trades: list[Trade]
    metrics: PerformanceMetrics
    equity: list[float]


@dataclass
class WalkForwardResult:
    """Metrics of each rolling in-sample and out-of-sample window"""
    in_sample: list[PerformanceMetrics] = field(default_factory=list)
    out_of_sample: list[PerformanceMetrics] = field(default_factory=list)

    @property
    def window_count(self) -> int:
        return len(self.in_sample)
