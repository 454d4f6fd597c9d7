"""Unit tests for candle parsing and series models."""

import pytest
from typing import Dict, Any

from solmacd.data.models import Candle, PriceSeries
from solmacd.data.parsers import parse_candle, parse_candles
from solmacd.errors import MalformedDataError, TemporalDataError


class TestParseCandle:
    """Test single candle parsing"""

    def test_provider_format(self, sample_candlestick: Dict[str, Any]) -> None:
        """Provider keys map onto the canonical candle; seconds become ms"""
        candle = parse_candle(sample_candlestick)

        assert candle == Candle(
            timestamp=1_700_000_000_000,
            open=100.0,
            high=105.0,
            low=99.0,
            close=103.0,
            volume=1000.0,
        )

    def test_canonical_format(self) -> None:
        candle = parse_candle({
            "timestamp": 1_700_000_000_000,
            "open": "1.5",
            "high": "1.6",
            "low": "1.4",
            "close": "1.55",
        })
        assert candle.close == 1.55
        assert candle.volume == 0.0
        assert candle.timestamp == 1_700_000_000_000

    def test_missing_field(self, sample_candlestick: Dict[str, Any]) -> None:
        del sample_candlestick["c"]
        with pytest.raises(MalformedDataError):
            parse_candle(sample_candlestick)

    def test_non_numeric_field(self, sample_candlestick: Dict[str, Any]) -> None:
        sample_candlestick["h"] = "high"
        with pytest.raises(MalformedDataError) as exc_info:
            parse_candle(sample_candlestick)
        assert exc_info.value.expected_format == "number"

    def test_not_a_mapping(self) -> None:
        with pytest.raises(MalformedDataError):
            parse_candle([1, 2, 3])  # type: ignore[arg-type]


class TestParseCandles:
    """Test candle list and envelope parsing"""

    def test_envelope_sorted(self, sample_candlestick: Dict[str, Any]) -> None:
        later = dict(sample_candlestick, unixTime=1_700_000_300)
        series = parse_candles({"data": {"items": [later, sample_candlestick]}})

        assert len(series) == 2
        assert series.timestamps == [1_700_000_000_000, 1_700_000_300_000]

    def test_empty_payload(self) -> None:
        assert len(parse_candles([])) == 0

    def test_duplicate_timestamps(self, sample_candlestick: Dict[str, Any]) -> None:
        with pytest.raises(TemporalDataError):
            parse_candles([sample_candlestick, dict(sample_candlestick)])

    def test_validation_can_be_skipped(self, sample_candlestick: Dict[str, Any]) -> None:
        series = parse_candles([sample_candlestick, dict(sample_candlestick)], validate=False)
        assert len(series) == 2

    def test_envelope_without_items(self) -> None:
        with pytest.raises(MalformedDataError):
            parse_candles({"data": {"items": None}})


class TestPriceSeries:
    """Test PriceSeries derived arrays"""

    def test_from_closes(self) -> None:
        series = PriceSeries.from_closes([100.0, 110.0, 99.0], start_ms=0, interval_ms=1000)

        assert series.closes == [100.0, 110.0, 99.0]
        assert series.timestamps == [0, 1000, 2000]
        assert series.volumes == [0.0, 0.0, 0.0]
        assert series.returns == pytest.approx([0.1, -0.1])
        assert series.last_close == 99.0

    def test_slicing(self) -> None:
        series = PriceSeries.from_closes([1.0, 2.0, 3.0, 4.0])

        assert isinstance(series[1:3], PriceSeries)
        assert series[1:3].closes == [2.0, 3.0]
        assert series[-1].close == 4.0

    def test_empty(self) -> None:
        series = PriceSeries()
        assert len(series) == 0
        assert series.last_close is None
        assert series.returns == []
