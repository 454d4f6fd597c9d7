#!/usr/bin/env python3
"""Performance benchmark script for SolMACD."""

import math
import sys
import time
from pathlib import Path
from typing import Dict, List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from solmacd.data.models import Candle, PriceSeries
from solmacd.engine import AnalysisEngine


def generate_sample_candles(count: int) -> List[Candle]:
    """Generate oscillating candles for benchmarking."""
    closes = [100.0 + 10 * math.sin(i / 8) + i * 0.01 for i in range(count)]
    return list(PriceSeries.from_closes(closes, start_ms=1_700_000_000_000, interval_ms=300_000))


def benchmark_indicators(engine: AnalysisEngine, candles: List[Candle], rounds: int = 50) -> float:
    """Average seconds per full indicator + statistics + regime pass."""
    closes = [c.close for c in candles]
    start_time = time.time()
    for _ in range(rounds):
        macd = engine.compute_indicators(closes)
        engine.compute_statistics(closes)
        engine.compute_regime(closes)
        engine.compute_divergence(closes, macd.macd_history)
    return (time.time() - start_time) / rounds


def benchmark_backtest(engine: AnalysisEngine, candles: List[Candle]) -> Dict[str, float]:
    """Benchmark one bar-by-bar backtest."""
    start_time = time.time()
    result = engine.run_backtest(candles, "MACD_CROSSOVER")
    total_time = time.time() - start_time

    bars = max(len(result.equity) - 1, 1)
    return {
        "total_time": total_time,
        "avg_time_per_bar": total_time / bars,
        "trades": len(result.trades),
    }


def main():
    """Main benchmark function."""
    print("⚡ SolMACD Performance Benchmark")
    print("=" * 40)

    engine = AnalysisEngine()

    for size in [100, 200, 500, 1000]:
        candles = generate_sample_candles(size)
        try:
            analysis_time = benchmark_indicators(engine, candles)
            backtest = benchmark_backtest(engine, candles)

            print(f"\n📊 Results for {size} candles:")
            print(f"   Analysis pass: {analysis_time * 1000:.3f}ms")
            print(f"   Backtest total: {backtest['total_time']:.3f}s ({backtest['trades']:.0f} trades)")
            print(f"   Backtest per bar: {backtest['avg_time_per_bar'] * 1000:.3f}ms")

        except Exception as e:
            print(f"   ❌ Benchmark failed: {e}")

    print("\n🎯 Notes:")
    print("   • Analysis requests use at most a few hundred candles")
    print("   • Backtests recompute MACD over the growing prefix on every bar")


if __name__ == "__main__":
    main()
