#!/usr/bin/env python3
"""
Basic Usage Example - SolMACD Analysis Core

This script demonstrates the basic usage of the SolMACD analysis engine
with simulated candle data. It shows how to:
- Initialize the engine with a market-data provider
- Compute MACD in standard and adaptive mode
- Read risk statistics, regime and divergence signals
- Backtest the built-in strategies

Run: python examples/basic_usage.py
"""

import math
import random
from typing import List

from solmacd.data.models import PriceSeries
from solmacd.data.provider import VolumeStats
from solmacd.engine import AnalysisEngine
from solmacd.logging import configure_logging
from solmacd.models.report import TokenAnalysis

BONK = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"


def generate_closes(count: int, seed: int = 7) -> List[float]:
    """Random walk with a slow cycle, always positive."""
    rng = random.Random(seed)
    price = 0.000025
    closes = []
    for i in range(count):
        drift = 0.004 * math.sin(i / 12)
        price *= 1 + drift + rng.gauss(0, 0.01)
        closes.append(price)
    return closes


class SimulatedProvider:
    """Serves a fixed synthetic candle history for any token."""

    def __init__(self, closes: List[float]):
        volumes = [1_000_000 * (1 + 0.5 * math.sin(i / 7)) for i in range(len(closes))]
        self.series = PriceSeries.from_closes(
            closes, start_ms=1_700_000_000_000, interval_ms=300_000, volumes=volumes
        )

    def fetch_candles(self, token_address: str, interval: str, limit: int) -> PriceSeries:
        return self.series[-limit:]

    def fetch_current_price(self, token_address: str) -> float:
        return self.series.candles[-1].close

    def fetch_volume_24h(self, token_address: str) -> VolumeStats:
        return VolumeStats(volume_24h=sum(self.series.volumes[-288:]), volume_change=0.0, trades_24h=0)


def print_report(report: TokenAnalysis) -> None:
    """Print the token analysis summary."""
    macd = report.indicators
    stats = report.statistics
    print(f"📊 {report.token_address[:8]}... ({report.interval}, {report.candle_count} candles)")
    print(f"  Last price: {report.last_price:.10f}")
    print("  MACD:")
    print(f"    MACD: {macd.macd:.3e}  Signal: {macd.signal:.3e}  Histogram: {macd.histogram:.3e}")
    print(f"    Signal strength: {report.signal_strength:.1f}/100")
    print(f"    Momentum: {report.momentum:.1f}%")
    print("  Statistics:")
    print(f"    Sharpe: {stats.sharpe_ratio:.2f}  Sortino: {stats.sortino_ratio:.2f}")
    print(f"    VaR(95): {stats.value_at_risk:.2f}%  Max drawdown: {stats.max_drawdown:.2f}%")
    print(f"    Kelly: {stats.kelly_criterion:.1f}%  Z-score: {stats.z_score:.2f}")
    print(f"  Regime: {report.regime.regime.value} ({report.regime.confidence:.0f}% confidence)")
    print(f"  Divergence: {report.divergence.type.value} (score {report.divergence_score:.1f})")
    print("-" * 50)


def main() -> None:
    """Run the basic usage example."""
    configure_logging(level="WARNING")

    print("🚀 SolMACD Basic Usage Example")
    print("=" * 50)

    closes = generate_closes(300)
    engine = AnalysisEngine(provider=SimulatedProvider(closes), rng=random.Random(1))

    # Full pipeline for one token, using tokens.yaml overrides for BONK
    report = engine.analyze_token(BONK, interval="5m", limit=200)
    print_report(report)

    # Adaptive MACD with an explicit volatility multiplier
    adaptive = engine.compute_indicators(closes, mode="ADAPTIVE", volatility=1.5)
    print(f"🔧 Adaptive MACD (x1.5 periods): {adaptive.macd:.3e}")

    # HMM regime for comparison with the EMA-structure regime
    hmm = engine.compute_regime(closes, method="HMM")
    print(f"🧭 HMM regime: {hmm.regime.value} ({hmm.confidence:.0f}% confidence)")

    print("\n📈 Backtests")
    candles = list(engine.market_data.fetch_candles(BONK, "5m", 300)) if engine.market_data else []
    for strategy in ("MACD_CROSSOVER", "HISTOGRAM", "MOMENTUM"):
        result = engine.run_backtest(candles, strategy)
        metrics = result.metrics
        print(f"  {strategy:<15} trades={metrics.total_trades:<3} "
              f"return={metrics.total_return:+.2f}% win_rate={metrics.win_rate:.0f}% "
              f"max_dd={metrics.max_drawdown:.2f}%")

    walk_forward = engine.run_walk_forward(candles, "MACD_CROSSOVER")
    print(f"\n🔁 Walk-forward windows: {walk_forward.window_count}")
    for i, (ins, oos) in enumerate(zip(walk_forward.in_sample, walk_forward.out_of_sample)):
        print(f"  Window {i + 1}: in-sample {ins.total_return:+.2f}%  out-of-sample {oos.total_return:+.2f}%")

    print("\n✅ Example complete")


if __name__ == "__main__":
    main()
