"""
Parsers for raw candle payloads from the market-data provider.

Accepts either canonical candle dicts ({timestamp, open, high, low, close,
volume}) or the provider's OHLCV item format ({unixTime, o, h, l, c, v}),
optionally wrapped in the provider envelope ({"data": {"items": [...]}}).
"""

from typing import Any, Mapping, Sequence, Union

from ..errors import MalformedDataError
from ..utils.time import normalize_timestamp_ms
from .models import Candle, PriceSeries
from .validators import validate_series

_CANONICAL_KEYS = ("timestamp", "open", "high", "low", "close", "volume")
_PROVIDER_KEYS = ("unixTime", "o", "h", "l", "c", "v")


def _to_float(raw: Mapping[str, Any], key: str) -> float:
    value = raw.get(key)
    if value is None:
        raise MalformedDataError(f"Missing field: {key}", raw_data=str(raw)[:200])
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedDataError(
            f"Field {key} is not numeric: {value!r}",
            raw_data=str(raw)[:200],
            expected_format="number",
        )


def parse_candle(raw: Mapping[str, Any]) -> Candle:
    """
    Parse a single candle dict.

    Raises:
        MalformedDataError: If required fields are missing or not numeric
    """
    if not isinstance(raw, Mapping):
        raise MalformedDataError(
            f"Candle must be a mapping, got {type(raw).__name__}",
            raw_data=str(raw)[:200],
        )

    if "unixTime" in raw:
        ts_key, o, h, low, c, v = _PROVIDER_KEYS
    else:
        ts_key, o, h, low, c, v = _CANONICAL_KEYS

    timestamp = normalize_timestamp_ms(_to_float(raw, ts_key))
    volume = _to_float(raw, v) if raw.get(v) is not None else 0.0

    return Candle(
        timestamp=timestamp,
        open=_to_float(raw, o),
        high=_to_float(raw, h),
        low=_to_float(raw, low),
        close=_to_float(raw, c),
        volume=volume,
    )


def _extract_items(payload: Union[Sequence[Any], Mapping[str, Any]]) -> Sequence[Any]:
    if isinstance(payload, Mapping):
        data = payload.get("data")
        if isinstance(data, Mapping):
            items = data.get("items")
        else:
            items = data
        if not isinstance(items, Sequence):
            raise MalformedDataError(
                "Payload has no candle items",
                raw_data=str(payload)[:200],
                expected_format='{"data": {"items": [...]}}',
            )
        return items
    return payload


def parse_candles(payload: Union[Sequence[Any], Mapping[str, Any]],
                  validate: bool = True) -> PriceSeries:
    """
    Parse a list of candle dicts (or a provider envelope) into a PriceSeries.

    Candles are sorted by timestamp before validation. An empty payload is a
    valid "no data" result.

    Args:
        payload: Raw candle list or provider response body
        validate: Run validate_series on the parsed candles

    Returns:
        PriceSeries in chronological order
    """
    items = _extract_items(payload)
    candles = sorted((parse_candle(item) for item in items), key=lambda c: c.timestamp)

    if validate:
        validate_series(candles)

    return PriceSeries.from_candles(candles)
