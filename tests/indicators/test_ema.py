"""Tests for EMA calculations"""

import pytest
from solmacd.indicators.ema import (
    EMACalculator,
    calculate_ema,
    calculate_ema_series,
    calculate_ema_with_alpha,
    calculate_incremental_ema,
    calculate_sma,
)


class TestSMA:
    """Test SMA seed calculation"""

    def test_sma_simple(self):
        """Test SMA of a short list"""
        assert calculate_sma([1, 2, 3, 4]) == 2.5

    def test_sma_empty(self):
        """Test SMA of empty input"""
        assert calculate_sma([]) == 0.0


class TestEMACalculation:
    """Test final EMA value"""

    def test_ema_exact_period_is_sma(self):
        """Test EMA with exactly period values equals their average"""
        data = [float(i) for i in range(1, 13)]
        assert calculate_ema(data, 12) == pytest.approx(6.5)

    def test_ema_one_step_past_seed(self):
        """Test EMA after one recurrence step"""
        data = [float(i) for i in range(1, 14)]
        # k = 2/13: 13 * 2/13 + 6.5 * 11/13 = 2 + 5.5
        assert calculate_ema(data, 12) == pytest.approx(7.5)

    def test_ema_insufficient_data(self):
        """Test EMA with fewer values than the period"""
        assert calculate_ema([1.0, 2.0, 3.0], 5) == 0.0

    def test_ema_invalid_period(self):
        """Test EMA with zero or negative period"""
        assert calculate_ema([1.0, 2.0, 3.0], 0) == 0.0
        assert calculate_ema([1.0, 2.0, 3.0], -3) == 0.0

    def test_ema_constant_series(self):
        """Test EMA of a flat series stays at the level"""
        assert calculate_ema([5.0] * 30, 10) == pytest.approx(5.0)


class TestEMASeries:
    """Test prefix-aligned EMA series"""

    def test_series_matches_prefix_computation(self):
        """Every element equals the EMA of the matching prefix"""
        data = [10.0, 11.0, 12.5, 11.8, 13.2, 14.0, 13.1, 15.5, 16.0, 15.2]
        series = calculate_ema_series(data, 4)

        assert len(series) == len(data)
        for i in range(len(data)):
            assert series[i] == pytest.approx(calculate_ema(data[:i + 1], 4))

    def test_series_zero_before_seed(self):
        """Indices before period - 1 hold 0"""
        series = calculate_ema_series([1.0, 2.0, 3.0, 4.0], 3)
        assert series[:2] == [0.0, 0.0]
        assert series[2] == pytest.approx(2.0)

    def test_series_short_input(self):
        """Input shorter than period yields all zeros"""
        assert calculate_ema_series([1.0, 2.0], 5) == [0.0, 0.0]

    def test_series_invalid_period(self):
        """Invalid period yields all zeros"""
        assert calculate_ema_series([1.0, 2.0], 0) == [0.0, 0.0]


class TestEMAVariants:
    """Test alpha, incremental and multi-period helpers"""

    def test_ema_with_alpha(self):
        """Test custom smoothing factor seeded with first value"""
        # 1 -> 1.5 -> 2.25
        assert calculate_ema_with_alpha([1.0, 2.0, 3.0], 0.5) == pytest.approx(2.25)

    def test_ema_with_alpha_empty(self):
        """Test custom smoothing factor on empty input"""
        assert calculate_ema_with_alpha([], 0.5) == 0.0

    def test_incremental_ema(self):
        """Test single-step update"""
        # period 3 -> k = 0.5
        assert calculate_incremental_ema(10.0, 20.0, 3) == pytest.approx(15.0)

    def test_incremental_matches_batch(self):
        """Streaming updates reproduce the batch EMA"""
        data = [3.0, 4.0, 6.0, 5.0, 7.0, 8.0]
        ema = calculate_ema(data[:3], 3)
        for price in data[3:]:
            ema = calculate_incremental_ema(ema, price, 3)
        assert ema == pytest.approx(calculate_ema(data, 3))

    def test_calculate_multiple(self):
        """Test EMA for several periods at once"""
        calc = EMACalculator()
        data = [float(i) for i in range(1, 31)]
        result = calc.calculate_multiple(data, [5, 10, 20])

        assert set(result) == {5, 10, 20}
        assert result[10] == pytest.approx(calculate_ema(data, 10))

    def test_dema_and_tema_converge_on_flat_series(self):
        """Double and triple EMA settle at the level of a flat series"""
        calc = EMACalculator()
        data = [5.0] * 200
        assert calc.calculate_dema(data, 3) == pytest.approx(5.0)
        assert calc.calculate_tema(data, 3) == pytest.approx(5.0)
