"""
Timestamp helpers for candle and result time handling.

Candle timestamps from the market-data provider are epoch milliseconds and
are authoritative for trades and signals. Wall-clock time is only used to
stamp freshly computed indicator results.
"""

import time
from datetime import datetime, timezone
from typing import Callable, Optional


def now_ms(clock: Optional[Callable[[], float]] = None) -> int:
    """
    Current wall-clock time in epoch milliseconds.

    Args:
        clock: Optional zero-argument callable returning epoch seconds

    Returns:
        Epoch milliseconds
    """
    seconds = clock() if clock is not None else time.time()
    return int(seconds * 1000)


def ms_to_datetime(timestamp_ms: int) -> datetime:
    """Convert epoch milliseconds to a UTC datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)


def normalize_timestamp_ms(timestamp: float) -> int:
    """
    Coerce a provider timestamp to epoch milliseconds.

    Providers report either seconds (10 digits) or milliseconds (13 digits).
    """
    if timestamp < 1e11:
        return int(timestamp * 1000)
    return int(timestamp)


def format_timestamp(timestamp_ms: int) -> str:
    """ISO8601 representation of an epoch-millisecond timestamp."""
    return ms_to_datetime(timestamp_ms).isoformat()
