"""Sample moments, location statistics and z-scores"""

import math
from collections import Counter
from typing import Sequence

from ..models.statistics import DistributionStats

# Standard deviations below this are treated as a flat series
ZERO_TOLERANCE = 1e-12


def is_zero(value: float) -> bool:
    return math.isclose(value, 0.0, abs_tol=ZERO_TOLERANCE)


def mean(data: Sequence[float]) -> float:
    """Arithmetic mean with compensated summation, 0 for empty input."""
    if len(data) == 0:
        return 0.0
    return math.fsum(data) / len(data)


def std_dev(data: Sequence[float]) -> float:
    """Population standard deviation, 0 for fewer than 2 values."""
    if len(data) < 2:
        return 0.0
    avg = mean(data)
    return math.sqrt(math.fsum((value - avg) ** 2 for value in data) / len(data))


def median(data: Sequence[float]) -> float:
    if len(data) == 0:
        return 0.0
    ordered = sorted(data)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def median_absolute_deviation(data: Sequence[float], center: float) -> float:
    return median([abs(value - center) for value in data])


def calculate_returns(prices: Sequence[float]) -> list[float]:
    """
    Simple returns between consecutive prices

    returns[i] = (prices[i + 1] - prices[i]) / prices[i]; a zero price yields
    a zero return.
    """
    return [
        (prices[i + 1] - prices[i]) / prices[i] if prices[i] != 0 else 0.0
        for i in range(len(prices) - 1)
    ]


def calculate_z_score(value: float, data: Sequence[float]) -> float:
    """Standard score of value within data, 0 for degenerate data."""
    if len(data) < 2:
        return 0.0

    deviation = std_dev(data)
    if is_zero(deviation):
        return 0.0

    return (value - mean(data)) / deviation


def calculate_modified_z_score(value: float, data: Sequence[float]) -> float:
    """
    Outlier-robust z-score based on the median absolute deviation

    0.6745 * (value - median) / MAD, 0 when MAD is 0.
    """
    if len(data) < 2:
        return 0.0

    center = median(data)
    mad = median_absolute_deviation(data, center)
    if is_zero(mad):
        return 0.0

    return 0.6745 * (value - center) / mad


def calculate_distribution_stats(data: Sequence[float]) -> DistributionStats:
    """
    Mean, median, mode, variance, standard deviation, skewness and excess kurtosis

    Moments are population moments. Ties for the mode resolve to the smallest
    value. Empty input returns all zeros.
    """
    if len(data) == 0:
        return DistributionStats(
            mean=0.0, median=0.0, mode=0.0, variance=0.0,
            std_dev=0.0, skewness=0.0, kurtosis=0.0,
        )

    avg = mean(data)
    n = len(data)
    m2 = math.fsum((value - avg) ** 2 for value in data) / n
    m3 = math.fsum((value - avg) ** 3 for value in data) / n
    m4 = math.fsum((value - avg) ** 4 for value in data) / n

    counts = Counter(data)
    top = max(counts.values())
    mode = min(value for value, count in counts.items() if count == top)

    if is_zero(m2):
        skewness = 0.0
        kurtosis = 0.0
    else:
        skewness = m3 / m2 ** 1.5
        kurtosis = m4 / m2 ** 2 - 3

    return DistributionStats(
        mean=avg,
        median=median(data),
        mode=mode,
        variance=m2,
        std_dev=math.sqrt(m2),
        skewness=skewness,
        kurtosis=kurtosis,
    )
