#!/usr/bin/env python3
"""Smoke checks for SolMACD.

Runs the analysis engine over a synthetic close series and checks the
properties every release must hold. Exits 0 when all checks pass, 1 otherwise.

Usage:
    python scripts/smoke_test.py
"""

import math
import random
import sys
from pathlib import Path
from typing import Callable, List, Tuple

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from solmacd.data.models import PriceSeries
from solmacd.engine import AnalysisEngine
from solmacd.models.indicators import Regime

TOLERANCE = 1e-9


def synthetic_series(count: int = 300, seed: int = 11) -> PriceSeries:
    """Positive random walk around a slow cycle."""
    rng = random.Random(seed)
    price = 1.5
    closes = []
    for i in range(count):
        price *= 1 + 0.006 * math.sin(i / 15) + rng.gauss(0, 0.008)
        closes.append(price)
    return PriceSeries.from_closes(closes, start_ms=1_700_000_000_000, interval_ms=300_000)


def check_histogram(engine: AnalysisEngine, series: PriceSeries) -> None:
    macd = engine.compute_indicators(series.closes)
    assert macd.has_history, "MACD history is empty"
    assert abs(macd.histogram - (macd.macd - macd.signal)) < TOLERANCE
    for m, s, h in zip(macd.macd_history, macd.signal_history, macd.histogram_history):
        assert abs(h - (m - s)) < TOLERANCE, "histogram != macd - signal"


def check_statistics(engine: AnalysisEngine, series: PriceSeries) -> None:
    stats = engine.compute_statistics(series.closes)
    assert 0.0 <= stats.kelly_criterion <= 25.0, f"Kelly out of range: {stats.kelly_criterion}"
    assert stats.max_drawdown >= 0.0, "negative drawdown"
    assert stats.value_at_risk >= 0.0, "negative VaR"


def check_regime(engine: AnalysisEngine, series: PriceSeries) -> None:
    for method in ("EMA", "HMM"):
        regime = engine.compute_regime(series.closes, method=method)
        assert regime.regime in set(Regime)
        assert 0.0 <= regime.confidence <= 100.0, f"{method} confidence out of range"


def check_backtests(engine: AnalysisEngine, series: PriceSeries) -> None:
    for strategy in ("MACD_CROSSOVER", "HISTOGRAM", "MOMENTUM"):
        result = engine.run_backtest(series.candles, strategy)
        assert all(not trade.is_open for trade in result.trades), f"{strategy} left a trade open"
        assert result.equity[0] == engine.config.backtest.initial_capital, f"{strategy} equity start"
        assert all(trade.exit_price is not None for trade in result.trades)


CHECKS: List[Tuple[str, Callable[[AnalysisEngine, PriceSeries], None]]] = [
    ("histogram = macd - signal", check_histogram),
    ("statistics bounds", check_statistics),
    ("regime confidence", check_regime),
    ("backtests close every trade", check_backtests),
]


def main() -> None:
    print("🧪 SolMACD smoke checks")
    print("=" * 60)

    engine = AnalysisEngine(rng=random.Random(0))
    series = synthetic_series()

    failures = 0
    for name, check in CHECKS:
        try:
            check(engine, series)
            print(f"✅ {name}")
        except AssertionError as exc:
            failures += 1
            print(f"❌ {name}: {exc}")

    print("=" * 60)
    print(f"Passed: {len(CHECKS) - failures}/{len(CHECKS)}")
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
