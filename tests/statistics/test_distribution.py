"""Tests for distribution statistics and z-scores"""

import pytest
from solmacd.statistics.distribution import (
    calculate_distribution_stats,
    calculate_modified_z_score,
    calculate_returns,
    calculate_z_score,
    is_zero,
    mean,
    median,
    std_dev,
)


class TestMoments:
    """Test mean, median and standard deviation"""

    def test_mean(self):
        assert mean([1.0, 2.0, 3.0, 4.0]) == 2.5
        assert mean([]) == 0.0

    def test_mean_compensated_sum(self):
        """Large offsetting terms do not swallow small values"""
        assert mean([1e16, 1.0, -1e16]) == pytest.approx(1 / 3)

    def test_population_std_dev(self):
        """Population (not sample) standard deviation"""
        assert std_dev([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_std_dev_short_input(self):
        """Fewer than 2 values gives 0"""
        assert std_dev([5.0]) == 0.0
        assert std_dev([]) == 0.0

    def test_median_even_and_odd(self):
        assert median([3.0, 1.0, 2.0]) == 2.0
        assert median([4.0, 1.0, 3.0, 2.0]) == 2.5

    def test_is_zero_tolerance(self):
        assert is_zero(1e-15)
        assert not is_zero(1e-6)


class TestReturns:
    """Test simple return series"""

    def test_returns(self):
        returns = calculate_returns([100.0, 110.0, 99.0])
        assert returns == pytest.approx([0.1, -0.1])

    def test_returns_zero_price(self):
        """Zero price yields a zero return instead of dividing"""
        assert calculate_returns([0.0, 10.0]) == [0.0]

    def test_returns_short_input(self):
        assert calculate_returns([100.0]) == []


class TestZScore:
    """Test standard and modified z-scores"""

    def test_z_score(self):
        data = [2, 4, 4, 4, 5, 5, 7, 9]
        # mean 5, std 2
        assert calculate_z_score(9, data) == pytest.approx(2.0)

    def test_z_score_flat_data(self):
        """Zero deviation gives 0"""
        assert calculate_z_score(5.0, [3.0, 3.0, 3.0]) == 0.0

    def test_z_score_short_data(self):
        assert calculate_z_score(5.0, [3.0]) == 0.0

    def test_modified_z_score(self):
        """Median absolute deviation resists the outlier"""
        data = [1.0, 2.0, 3.0, 4.0, 100.0]
        # median 3, MAD 1
        assert calculate_modified_z_score(100.0, data) == pytest.approx(0.6745 * 97)


class TestDistributionStats:
    """Test full distribution summary"""

    def test_symmetric_distribution(self):
        stats = calculate_distribution_stats([1.0, 2.0, 2.0, 3.0])

        assert stats.mean == pytest.approx(2.0)
        assert stats.median == 2.0
        assert stats.mode == 2.0
        assert stats.variance == pytest.approx(0.5)
        assert stats.skewness == pytest.approx(0.0)
        # m4 / m2^2 - 3 = 0.5 / 0.25 - 3
        assert stats.kurtosis == pytest.approx(-1.0)

    def test_mode_tie_takes_smallest(self):
        stats = calculate_distribution_stats([3.0, 1.0, 3.0, 1.0])
        assert stats.mode == 1.0

    def test_flat_distribution(self):
        """Flat data has no skew or excess kurtosis"""
        stats = calculate_distribution_stats([4.0, 4.0, 4.0])
        assert stats.std_dev == 0.0
        assert stats.skewness == 0.0
        assert stats.kurtosis == 0.0

    def test_empty_distribution(self):
        stats = calculate_distribution_stats([])
        assert stats.mean == 0.0
        assert stats.variance == 0.0
