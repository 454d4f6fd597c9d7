"""Tests for MACD calculations"""

import pytest
from solmacd.indicators.macd import MACDCalculator
from solmacd.models.indicators import MACDResult, SignalDirection


def _result(macd: float, signal: float) -> MACDResult:
    return MACDResult(
        macd=macd,
        signal=signal,
        histogram=macd - signal,
        timestamp=0,
        macd_history=(macd,),
        signal_history=(signal,),
        histogram_history=(macd - signal,),
    )


class TestMACDCalculation:
    """Test standard MACD computation"""

    def test_insufficient_data_returns_empty(self):
        """Series shorter than slow + signal gives a zeroed result"""
        calc = MACDCalculator()
        result = calc.calculate([100.0] * 34, timestamp=123)

        assert result.macd == 0.0
        assert result.signal == 0.0
        assert result.histogram == 0.0
        assert result.timestamp == 123
        assert not result.has_history

    def test_minimum_length(self):
        """Exactly slow + signal prices yields two history points"""
        calc = MACDCalculator()
        prices = [100 + i * 0.5 for i in range(35)]
        result = calc.calculate(prices, timestamp=0)

        assert calc.min_length == 35
        assert len(result.macd_history) == 2
        assert result.has_history

    def test_histogram_is_macd_minus_signal(self, wave_prices):
        """Histogram equals MACD minus signal for the last bar and the history"""
        result = MACDCalculator().calculate(wave_prices, timestamp=0)

        assert result.histogram == pytest.approx(result.macd - result.signal)
        for m, s, h in zip(result.macd_history, result.signal_history, result.histogram_history):
            assert h == pytest.approx(m - s)

    def test_histories_aligned(self, wave_prices):
        """All three histories have equal length and end at the latest values"""
        result = MACDCalculator().calculate(wave_prices, timestamp=0)
        expected_length = len(wave_prices) - 25 - 8

        assert len(result.macd_history) == expected_length
        assert len(result.signal_history) == expected_length
        assert len(result.histogram_history) == expected_length
        assert result.macd_history[-1] == result.macd
        assert result.signal_history[-1] == result.signal

    def test_flat_prices_zero_macd(self):
        """Flat series has no momentum"""
        result = MACDCalculator().calculate([50.0] * 60, timestamp=0)
        assert result.macd == pytest.approx(0.0, abs=1e-9)
        assert result.histogram == pytest.approx(0.0, abs=1e-9)

    def test_rising_prices_positive_macd(self):
        """Uptrend puts the fast EMA above the slow EMA"""
        prices = [100 + i for i in range(60)]
        result = MACDCalculator().calculate(prices, timestamp=0)
        assert result.macd > 0

    def test_timestamp_from_clock(self):
        """Result timestamp comes from the injected clock when not given"""
        calc = MACDCalculator(clock=lambda: 1_700_000_000.0)
        result = calc.calculate([1.0, 2.0])
        assert result.timestamp == 1_700_000_000_000

    def test_calculate_from_candles(self, wave_candles, wave_prices):
        """Candle input uses close prices"""
        calc = MACDCalculator()
        assert calc.calculate_from_candles(wave_candles, 0) == calc.calculate(wave_prices, 0)


class TestAdaptiveMACD:
    """Test volatility-scaled MACD"""

    def test_unit_volatility_matches_standard(self, wave_prices):
        """Multiplier 1 keeps the standard periods"""
        calc = MACDCalculator()
        assert calc.calculate_adaptive(wave_prices, 1.0, 0) == calc.calculate(wave_prices, 0)

    def test_low_volatility_clamped(self, wave_prices):
        """Volatility below the minimum multiplier halves the periods"""
        calc = MACDCalculator()
        expected = MACDCalculator(6, 13, 9).calculate(wave_prices, 0)
        assert calc.calculate_adaptive(wave_prices, 0.02, 0) == expected

    def test_high_volatility_clamped(self, wave_prices):
        """Volatility above the maximum multiplier doubles the periods"""
        calc = MACDCalculator()
        expected = MACDCalculator(24, 52, 9).calculate(wave_prices, 0)
        assert calc.calculate_adaptive(wave_prices, 5.0, 0) == expected

    def test_half_periods_round_up(self, wave_prices):
        """Fractional periods ending in .5 round up"""
        calc = MACDCalculator(fast_period=5, slow_period=13)
        # 2.5 -> 3 and 6.5 -> 7
        expected = MACDCalculator(3, 7, 9).calculate(wave_prices, 0)
        assert calc.calculate_adaptive(wave_prices, 0.5, 0) == expected


class TestCrossover:
    """Test crossover detection"""

    def test_same_result_is_none(self, wave_prices):
        """A result compared with itself never crosses"""
        result = MACDCalculator().calculate(wave_prices, timestamp=0)
        assert MACDCalculator.detect_crossover(result, result) == SignalDirection.NONE

    def test_missing_result_is_none(self):
        """Missing previous result gives NONE"""
        assert MACDCalculator.detect_crossover(_result(1.0, 0.0), None) == SignalDirection.NONE

    def test_bullish_crossover(self):
        """MACD crossing above signal"""
        assert MACDCalculator.detect_crossover(_result(1.0, 0.0), _result(-1.0, 0.0)) == SignalDirection.BULLISH

    def test_bearish_crossover(self):
        """MACD crossing below signal"""
        assert MACDCalculator.detect_crossover(_result(-1.0, 0.0), _result(1.0, 0.0)) == SignalDirection.BEARISH

    def test_touch_is_not_crossover(self):
        """Reaching the signal line without crossing it"""
        assert MACDCalculator.detect_crossover(_result(0.0, 0.0), _result(-1.0, 0.0)) == SignalDirection.NONE


class TestMomentumAndStrength:
    """Test MACD momentum and signal strength"""

    def test_momentum_short_history(self):
        """No earlier window gives 0"""
        assert MACDCalculator.calculate_momentum([1.0] * 10) == 0.0
        assert MACDCalculator.calculate_momentum([1.0]) == 0.0

    def test_momentum_doubling(self):
        """Recent mean twice the older mean is +100%"""
        history = [1.0] * 10 + [2.0] * 10
        assert MACDCalculator.calculate_momentum(history) == pytest.approx(100.0)

    def test_momentum_zero_baseline(self):
        """Older mean of 0 gives 0"""
        history = [0.0] * 10 + [2.0] * 10
        assert MACDCalculator.calculate_momentum(history) == 0.0

    def test_signal_strength_capped(self):
        """Large values saturate every component"""
        result = MACDResult(macd=0.5, signal=0.1, histogram=0.4, timestamp=0)
        assert MACDCalculator.validate_signal_strength(result) == 100.0

    def test_signal_strength_small_values(self):
        """Small values scale linearly"""
        result = MACDResult(macd=0.001, signal=0.0, histogram=0.001, timestamp=0)
        # 1.0 + 0.1 + 0.1
        assert MACDCalculator.validate_signal_strength(result) == pytest.approx(1.2)

    def test_signal_strength_bounds(self, wave_prices):
        """Score stays within 0-100"""
        result = MACDCalculator().calculate(wave_prices, timestamp=0)
        assert 0.0 <= MACDCalculator.validate_signal_strength(result) <= 100.0
