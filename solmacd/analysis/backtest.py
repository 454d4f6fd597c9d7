"""Bar-by-bar backtest of MACD-driven strategies"""

from typing import Callable, Optional, Sequence, Union

from ..config.defaults import BacktestParams
from ..data.models import Candle
from ..indicators.macd import MACDCalculator
from ..logging.config import get_backtest_logger, log_trade_event
from ..models.indicators import MACDResult
from ..models.statistics import PerformanceMetrics
from ..models.trading import (
    BacktestResult,
    PositionSide,
    Trade,
    TradeAction,
    WalkForwardResult,
)
from ..statistics.analyzer import StatisticalAnalyzer
from ..statistics.distribution import mean

logger = get_backtest_logger(__name__)

# Strategies may return TradeAction members or their string values
Strategy = Callable[[MACDResult, float], Union[TradeAction, str]]


class BacktestEngine:
    """
    Simulates a long-only strategy over historical candles

    Starts flat, skips warmup_bars, recomputes MACD on the growing close
    prefix each bar and asks the strategy for BUY/SELL/HOLD. Open positions
    are closed by SELL, stop loss, take profit or at the end of data.
    """

    def __init__(self, config: Optional[BacktestParams] = None,
                 macd_calculator: Optional[MACDCalculator] = None,
                 stats_analyzer: Optional[StatisticalAnalyzer] = None):
        self.config = config or BacktestParams()
        self.macd_calculator = macd_calculator or MACDCalculator()
        self.stats_analyzer = stats_analyzer or StatisticalAnalyzer()

    def run_backtest(self, candles: Sequence[Candle], strategy: Strategy,
                     warmup_bars: Optional[int] = None) -> BacktestResult:
        """
        Run one backtest

        Args:
            candles: Candles in chronological order
            strategy: Callable deciding an action from (MACDResult, close)
            warmup_bars: Bars to skip before trading, defaults to config

        Returns:
            BacktestResult with trade log, equity curve (initial capital plus
            one value per processed bar) and performance metrics
        """
        cfg = self.config
        warmup = cfg.warmup_bars if warmup_bars is None else warmup_bars

        reset = getattr(strategy, "reset", None)
        if callable(reset):
            reset()

        trades: list[Trade] = []
        equity = [cfg.initial_capital]
        capital = cfg.initial_capital
        position: Optional[Trade] = None

        closes = [c.close for c in candles]

        for i in range(warmup, len(candles)):
            candle = candles[i]
            price = closes[i]
            macd = self.macd_calculator.calculate(closes[:i + 1], timestamp=candle.timestamp)
            action = TradeAction(strategy(macd, price))

            if action == TradeAction.BUY and position is None:
                size = capital * cfg.position_size / price
                entry_price = price * (1 + cfg.slippage)
                commission = size * entry_price * cfg.commission

                position = Trade(
                    entry_time=candle.timestamp,
                    entry_price=entry_price,
                    position=PositionSide.LONG,
                    size=size,
                )
                capital -= commission
                trades.append(position)
                log_trade_event(logger, "open", position, "signal", {"commission": commission})

            elif (action == TradeAction.SELL and position is not None
                  and position.position == PositionSide.LONG):
                exit_price = price * (1 - cfg.slippage)
                capital += self._close(position, candle.timestamp, exit_price, "signal")
                position = None

            if position is not None:
                change = (price - position.entry_price) / position.entry_price

                if cfg.stop_loss and change <= -cfg.stop_loss:
                    exit_price = position.entry_price * (1 - cfg.stop_loss)
                    capital += self._close(position, candle.timestamp, exit_price, "stop_loss")
                    position = None
                elif cfg.take_profit and change >= cfg.take_profit:
                    exit_price = position.entry_price * (1 + cfg.take_profit)
                    capital += self._close(position, candle.timestamp, exit_price, "take_profit")
                    position = None

            equity.append(capital)

        if position is not None:
            # Mark to market at the last close, no slippage or commission
            last = candles[-1]
            pnl = (last.close - position.entry_price) * position.size
            position.close(last.timestamp, last.close, pnl)
            capital += pnl
            equity[-1] = capital
            log_trade_event(logger, "close", position, "end_of_data")

        metrics = self.calculate_metrics(trades, equity)

        return BacktestResult(trades=trades, metrics=metrics, equity=equity)

    def calculate_metrics(self, trades: Sequence[Trade], equity: Sequence[float]) -> PerformanceMetrics:
        """Derive performance metrics from closed trades and the equity curve"""
        if not equity:
            return PerformanceMetrics()

        stats = self.stats_analyzer
        initial = self.config.initial_capital

        closed = [t for t in trades if not t.is_open]
        winners = [t.pnl_percent or 0.0 for t in closed if (t.pnl or 0.0) > 0]
        losers = [t.pnl_percent or 0.0 for t in closed if (t.pnl or 0.0) < 0]

        total_return = (equity[-1] - initial) / initial * 100

        returns = [
            (equity[i] - equity[i - 1]) / equity[i - 1] if equity[i - 1] != 0 else 0.0
            for i in range(1, len(equity))
        ]

        win_rate = len(winners) / len(closed) * 100 if closed else 0.0
        avg_win = mean(winners)
        avg_loss = abs(mean(losers))
        profit_factor = avg_win / avg_loss if avg_loss > 0 else 0.0

        max_drawdown = stats.calculate_max_drawdown(equity)
        calmar_ratio = total_return / max_drawdown if max_drawdown > 0 else 0.0

        return PerformanceMetrics(
            total_return=total_return,
            annualized_return=total_return * (stats.params.periods_per_year / len(equity)),
            max_drawdown=max_drawdown,
            sharpe_ratio=stats.calculate_sharpe_ratio(returns),
            sortino_ratio=stats.calculate_sortino_ratio(returns),
            volatility=stats.calculate_volatility(returns) * 100,
            var_95=stats.calculate_var(returns, 0.95),
            var_99=stats.calculate_var(returns, 0.99),
            cvar_95=stats.calculate_cvar(returns, 0.95),
            win_rate=win_rate,
            profit_factor=profit_factor,
            kelly_criterion=stats.calculate_kelly_criterion(win_rate / 100, avg_win, avg_loss),
            avg_win=avg_win,
            avg_loss=avg_loss,
            max_win=max(winners) if winners else 0.0,
            max_loss=abs(min(losers)) if losers else 0.0,
            calmar_ratio=calmar_ratio,
            total_trades=len(closed),
        )

    def run_walk_forward_analysis(self, candles: Sequence[Candle], strategy: Strategy,
                                  window_size: Optional[int] = None,
                                  step_size: Optional[int] = None) -> WalkForwardResult:
        """
        Rerun the backtest over rolling in-sample/out-of-sample windows

        Window k covers in-sample candles [k*step, k*step + window) and
        out-of-sample candles [k*step + window, k*step + window + step). Each
        out-of-sample run is prefixed with up to warmup_bars preceding candles
        so its MACD has history; trading starts at the first out-of-sample bar.
        """
        window = self.config.walk_forward_window if window_size is None else window_size
        step = self.config.walk_forward_step if step_size is None else step_size
        if window <= 0 or step <= 0:
            raise ValueError(f"window_size and step_size must be positive, got {window}, {step}")

        result = WalkForwardResult()

        for start in range(0, len(candles) - window - step, step):
            in_sample = self.run_backtest(candles[start:start + window], strategy)
            result.in_sample.append(in_sample.metrics)

            oos_start = start + window
            history_start = max(0, oos_start - self.config.warmup_bars)
            out_of_sample = self.run_backtest(
                candles[history_start:oos_start + step],
                strategy,
                warmup_bars=oos_start - history_start,
            )
            result.out_of_sample.append(out_of_sample.metrics)

        logger.info("Walk-forward analysis complete", windows=result.window_count,
                    window_size=window, step_size=step)

        return result

    def _close(self, trade: Trade, timestamp: int, exit_price: float, reason: str) -> float:
        """Close trade paying exit commission; returns the realized pnl."""
        commission = trade.size * exit_price * self.config.commission
        pnl = (exit_price - trade.entry_price) * trade.size - commission
        trade.close(timestamp, exit_price, pnl)
        log_trade_event(logger, "close", trade, reason, {"commission": commission})
        return pnl
