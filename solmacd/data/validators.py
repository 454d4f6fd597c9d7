"""
Candle series validation.

Checks the ordering contract every candle source must honour before the
series reaches the numeric core.
"""

import math
from typing import Sequence

from ..errors import MalformedDataError, TemporalDataError
from .models import Candle


def validate_candle(candle: Candle) -> None:
    """
    Validate a single candle's prices and volume.

    Raises:
        MalformedDataError: On non-finite, non-positive or inconsistent OHLC values
    """
    prices = [candle.open, candle.high, candle.low, candle.close]
    for price in prices:
        if math.isnan(price) or math.isinf(price):
            raise MalformedDataError(f"Invalid price value: {price}", raw_data=str(candle))
        if price <= 0:
            raise MalformedDataError(f"Non-positive price: {price}", raw_data=str(candle))

    if candle.high < max(candle.open, candle.close):
        raise MalformedDataError("High price less than open/close", raw_data=str(candle))
    if candle.low > min(candle.open, candle.close):
        raise MalformedDataError("Low price greater than open/close", raw_data=str(candle))

    if math.isnan(candle.volume) or math.isinf(candle.volume):
        raise MalformedDataError(f"Invalid volume value: {candle.volume}", raw_data=str(candle))
    if candle.volume < 0:
        raise MalformedDataError(f"Negative volume: {candle.volume}", raw_data=str(candle))


def validate_series(candles: Sequence[Candle]) -> None:
    """
    Validate a candle series: every candle well-formed, timestamps strictly ascending.

    An empty series is valid and means "no data".

    Raises:
        MalformedDataError: If any candle is malformed
        TemporalDataError: If timestamps repeat or go backwards
    """
    previous = None
    for candle in candles:
        validate_candle(candle)
        if previous is not None:
            if candle.timestamp == previous.timestamp:
                raise TemporalDataError(
                    "Duplicate candle timestamp",
                    timestamp=candle.timestamp,
                    expected_timestamp=previous.timestamp,
                )
            if candle.timestamp < previous.timestamp:
                raise TemporalDataError(
                    "Candles are not in chronological order",
                    timestamp=candle.timestamp,
                    expected_timestamp=previous.timestamp,
                )
        previous = candle
