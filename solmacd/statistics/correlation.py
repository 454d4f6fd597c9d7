"""Correlation analysis: Pearson, Spearman, rolling and regime changes"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from ..errors import MalformedDataError
from .distribution import mean


class CorrelationRegime(str, Enum):
    HIGH = "HIGH"
    LOW = "LOW"
    NEUTRAL = "NEUTRAL"


@dataclass(frozen=True)
class CorrelationMatrix:
    """Symmetric correlation matrix with series labels"""
    matrix: list[list[float]]
    labels: list[str]


@dataclass(frozen=True)
class CorrelationRegimeChange:
    """Indices where |correlation| crossed the threshold, plus the current regime"""
    changes: list[int] = field(default_factory=list)
    current_regime: CorrelationRegime = CorrelationRegime.NEUTRAL


def _require_equal_length(x: Sequence[float], y: Sequence[float]) -> None:
    if len(x) != len(y):
        raise MalformedDataError(
            "Correlated series must have equal length",
            expected_format=f"{len(x)} values",
            context={"x": len(x), "y": len(y)},
        )


def rank_data(data: Sequence[float]) -> list[float]:
    """1-based ranks; tied values share the average of their ranks."""
    order = sorted(range(len(data)), key=lambda i: data[i])
    ranks = [0.0] * len(data)

    i = 0
    while i < len(order):
        j = i
        while j + 1 < len(order) and data[order[j + 1]] == data[order[i]]:
            j += 1
        average_rank = (i + j) / 2 + 1
        for k in range(i, j + 1):
            ranks[order[k]] = average_rank
        i = j + 1

    return ranks


class CorrelationAnalyzer:
    """
    Correlation statistics between equally long series

    Mismatched lengths are a caller error and raise MalformedDataError;
    empty or constant series give 0.
    """

    def __init__(self, high_threshold: float = 0.7, low_threshold: float = 0.3):
        self.high_threshold = high_threshold
        self.low_threshold = low_threshold

    def calculate_pearson(self, x: Sequence[float], y: Sequence[float]) -> float:
        _require_equal_length(x, y)
        if len(x) == 0:
            return 0.0

        mean_x = mean(x)
        mean_y = mean(y)

        numerator = 0.0
        denominator_x = 0.0
        denominator_y = 0.0
        for xi, yi in zip(x, y):
            dx = xi - mean_x
            dy = yi - mean_y
            numerator += dx * dy
            denominator_x += dx * dx
            denominator_y += dy * dy

        denominator = math.sqrt(denominator_x * denominator_y)
        if denominator == 0:
            return 0.0

        # Rounding can push |r| a hair past 1
        return max(-1.0, min(1.0, numerator / denominator))

    def calculate_spearman(self, x: Sequence[float], y: Sequence[float]) -> float:
        """Pearson correlation of the ranks"""
        _require_equal_length(x, y)
        if len(x) == 0:
            return 0.0
        return self.calculate_pearson(rank_data(x), rank_data(y))

    def calculate_matrix(self, datasets: Sequence[Sequence[float]],
                         labels: Optional[Sequence[str]] = None) -> CorrelationMatrix:
        """
        Pearson correlation matrix

        Only the upper triangle is computed; the lower triangle mirrors it and
        the diagonal is 1.
        """
        if labels is not None and len(labels) != len(datasets):
            raise MalformedDataError(
                "Label count must match dataset count",
                context={"labels": len(labels), "datasets": len(datasets)},
            )

        n = len(datasets)
        matrix = [[0.0] * n for _ in range(n)]
        for i in range(n):
            matrix[i][i] = 1.0
            for j in range(i + 1, n):
                value = self.calculate_pearson(datasets[i], datasets[j])
                matrix[i][j] = value
                matrix[j][i] = value

        final_labels = list(labels) if labels is not None else [f"Series {i + 1}" for i in range(n)]
        return CorrelationMatrix(matrix=matrix, labels=final_labels)

    def calculate_rolling_correlation(self, x: Sequence[float], y: Sequence[float],
                                      window: int) -> list[float]:
        """Pearson correlation over each trailing window, oldest first"""
        _require_equal_length(x, y)
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        if len(x) < window:
            return []

        return [
            self.calculate_pearson(x[i - window:i], y[i - window:i])
            for i in range(window, len(x) + 1)
        ]

    def detect_regime_change(self, correlations: Sequence[float],
                             threshold: Optional[float] = None) -> CorrelationRegimeChange:
        """
        Find where |correlation| crosses the threshold and classify the latest value

        Current regime is HIGH above the high threshold, LOW below the low
        threshold, NEUTRAL otherwise or for an empty series.
        """
        threshold = self.low_threshold if threshold is None else threshold

        changes = []
        for i in range(1, len(correlations)):
            prev = abs(correlations[i - 1])
            curr = abs(correlations[i])
            if (prev < threshold <= curr) or (curr < threshold <= prev):
                changes.append(i)

        if not correlations:
            return CorrelationRegimeChange(changes=changes)

        last = abs(correlations[-1])
        if last > self.high_threshold:
            regime = CorrelationRegime.HIGH
        elif last < self.low_threshold:
            regime = CorrelationRegime.LOW
        else:
            regime = CorrelationRegime.NEUTRAL

        return CorrelationRegimeChange(changes=changes, current_regime=regime)

    def calculate_partial_correlation(self, x: Sequence[float], y: Sequence[float],
                                      z: Sequence[float]) -> float:
        """Correlation of x and y controlling for z"""
        rxy = self.calculate_pearson(x, y)
        rxz = self.calculate_pearson(x, z)
        ryz = self.calculate_pearson(y, z)

        denominator = math.sqrt((1 - rxz * rxz) * (1 - ryz * ryz))
        if denominator == 0:
            return 0.0

        return (rxy - rxz * ryz) / denominator

    def calculate_autocorrelation(self, data: Sequence[float], max_lag: int = 20) -> list[float]:
        """Pearson autocorrelation for lags 0..max_lag (stops at the series length)"""
        result = []
        for lag in range(max_lag + 1):
            if lag >= len(data):
                break
            result.append(self.calculate_pearson(data[:len(data) - lag], data[lag:]))
        return result
