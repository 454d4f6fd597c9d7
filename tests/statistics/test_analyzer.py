"""Tests for the statistical analyzer"""

import pytest
from solmacd.config.defaults import StatisticsParams
from solmacd.errors import MalformedDataError
from solmacd.models.statistics import StatisticalMetrics
from solmacd.statistics.analyzer import StatisticalAnalyzer
from solmacd.statistics.ratios import calculate_sharpe_ratio


class TestStatisticalAnalyzer:
    """Test suite for StatisticalAnalyzer."""

    def test_defaults_from_params(self) -> None:
        """Wrapper methods pick up configured rates"""
        analyzer = StatisticalAnalyzer(StatisticsParams(risk_free_rate=0.0, periods_per_year=1))
        assert analyzer.calculate_sharpe_ratio([0.02, 0.0]) == pytest.approx(1.0)

    def test_explicit_arguments_override(self) -> None:
        analyzer = StatisticalAnalyzer()
        expected = calculate_sharpe_ratio([0.02, 0.0], 0.0, 1)
        assert analyzer.calculate_sharpe_ratio([0.02, 0.0], 0.0, 1) == expected

    def test_kelly_respects_configured_cap(self) -> None:
        analyzer = StatisticalAnalyzer(StatisticsParams(max_kelly_pct=5.0))
        assert analyzer.calculate_kelly_criterion(0.55, 1.0, 1.0) == 5.0

    def test_return_kelly(self) -> None:
        """Win rate and payoff derived from the sign split"""
        analyzer = StatisticalAnalyzer()
        # win rate 0.75, b = 2 -> 62.5% capped at 25
        assert analyzer.calculate_return_kelly([0.02, 0.02, -0.01, 0.02]) == 25.0

    def test_return_kelly_without_losses(self) -> None:
        analyzer = StatisticalAnalyzer()
        assert analyzer.calculate_return_kelly([0.01, 0.02]) == 0.0

    def test_volatility(self) -> None:
        analyzer = StatisticalAnalyzer()
        assert analyzer.calculate_volatility([0.02, 0.0]) == pytest.approx(0.01)


class TestAllMetrics:
    """Test the combined metrics bundle"""

    def test_all_metrics_from_prices(self) -> None:
        prices = [100.0, 102.0, 99.0, 101.0, 104.0, 103.0]
        metrics = StatisticalAnalyzer().calculate_all_metrics(prices)

        assert isinstance(metrics, StatisticalMetrics)
        assert metrics.max_drawdown == pytest.approx((102 - 99) / 102 * 100)
        assert metrics.correlation == [[1.0]]
        assert 0.0 <= metrics.kelly_criterion <= 25.0
        assert metrics.value_at_risk >= 0.0

    def test_all_metrics_flat_prices(self) -> None:
        """Flat series produces neutral values instead of errors"""
        metrics = StatisticalAnalyzer().calculate_all_metrics([50.0] * 10)

        assert metrics.sharpe_ratio == 0.0
        assert metrics.sortino_ratio == 0.0
        assert metrics.value_at_risk == 0.0
        assert metrics.max_drawdown == 0.0
        assert metrics.z_score == 0.0

    def test_all_metrics_single_price(self) -> None:
        metrics = StatisticalAnalyzer().calculate_all_metrics([50.0])
        assert metrics.sharpe_ratio == 0.0
        assert metrics.z_score == 0.0

    def test_all_metrics_with_datasets(self) -> None:
        returns = [0.01, -0.02, 0.03, 0.0]
        benchmark = [0.02, -0.04, 0.06, 0.0]
        metrics = StatisticalAnalyzer().calculate_all_metrics(
            [100.0, 101.0, 98.98, 101.95, 101.95], returns, [returns, benchmark]
        )

        assert len(metrics.correlation) == 2
        assert metrics.correlation[0][1] == pytest.approx(1.0)

    def test_all_metrics_mismatched_datasets(self) -> None:
        with pytest.raises(MalformedDataError):
            StatisticalAnalyzer().calculate_all_metrics([100.0, 101.0], [0.01], [[0.01], [0.01, 0.02]])
