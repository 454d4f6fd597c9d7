"""
Error classification for the analysis core.

Degenerate market conditions (short series, flat prices) are reported through
neutral results, not exceptions. The exceptions below are raised for caller
contract violations and unexpected failures.
"""

from .data_quality import (
    DataQualityError,
    TemporalDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    MetricsCalculationError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "MetricsCalculationError",
    "ConfigurationError",
]
