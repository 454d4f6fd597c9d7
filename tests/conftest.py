"""Pytest configuration and shared fixtures."""

import math
import random

import pytest
from typing import Dict, Any, List

from solmacd.data.models import Candle, PriceSeries


def _flat_candles(closes: List[float], start_ms: int = 1_700_000_000_000,
                  interval_ms: int = 60_000) -> List[Candle]:
    return list(PriceSeries.from_closes(closes, start_ms=start_ms, interval_ms=interval_ms))


@pytest.fixture
def make_candles():
    """Factory building flat candles (open=high=low=close) from closes."""
    return _flat_candles


@pytest.fixture
def sample_candlestick() -> Dict[str, Any]:
    """Sample provider OHLCV item for testing."""
    return {
        "unixTime": 1_700_000_000,
        "o": 100.0,
        "h": 105.0,
        "l": 99.0,
        "c": 103.0,
        "v": 1000.0,
    }


@pytest.fixture
def rising_prices() -> List[float]:
    """Steadily rising close prices (0.1% per bar)."""
    return [100 * 1.001 ** i for i in range(60)]


@pytest.fixture
def falling_prices() -> List[float]:
    """Steadily falling close prices (0.1% per bar)."""
    return [100 * 0.999 ** i for i in range(60)]


@pytest.fixture
def wave_prices() -> List[float]:
    """Oscillating close prices long enough for MACD and walk-forward runs."""
    return [100 + 10 * math.sin(i / 5) + i * 0.05 for i in range(200)]


@pytest.fixture
def wave_candles(wave_prices: List[float]) -> List[Candle]:
    return _flat_candles(wave_prices)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)
