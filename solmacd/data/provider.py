"""
Market-data provider interface and cached access wrapper.

Concrete HTTP clients live outside this package; anything implementing
MarketDataProvider can feed the analysis engine.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

import structlog

from ..config.defaults import CacheParams
from ..utils.cache import TTLCache
from .models import PriceSeries

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class VolumeStats:
    """24h trading activity for a token."""
    volume_24h: float
    volume_change: float                            # Percent
    trades_24h: int


class MarketDataProvider(Protocol):
    """Collaborator that fetches market data for a token address."""

    def fetch_candles(self, token_address: str, interval: str, limit: int) -> PriceSeries:
        """Chronologically ascending candles; empty series means no data."""
        ...

    def fetch_current_price(self, token_address: str) -> float:
        ...

    def fetch_volume_24h(self, token_address: str) -> VolumeStats:
        ...


class CachedMarketData:
    """Wraps a provider with explicit, caller-owned TTL caches."""

    def __init__(self, provider: MarketDataProvider,
                 params: Optional[CacheParams] = None,
                 price_cache: Optional[TTLCache] = None,
                 token_cache: Optional[TTLCache] = None):
        self.provider = provider
        self.params = params or CacheParams()
        self.price_cache: TTLCache = price_cache or TTLCache(self.params.price_ttl_seconds)
        self.token_cache: TTLCache = token_cache or TTLCache(self.params.token_ttl_seconds)

    def fetch_candles(self, token_address: str, interval: str, limit: int) -> PriceSeries:
        key = ("candles", token_address, interval, limit)
        cached = self.price_cache.get(key)
        if cached is not None:
            logger.debug("Candle cache hit", token_address=token_address, interval=interval)
            return cached

        series = self.provider.fetch_candles(token_address, interval, limit)
        self.price_cache.set(key, series)
        return series

    def fetch_current_price(self, token_address: str) -> float:
        return self.price_cache.get_or_set(
            ("price", token_address),
            lambda: self.provider.fetch_current_price(token_address),
        )

    def fetch_volume_24h(self, token_address: str) -> VolumeStats:
        return self.token_cache.get_or_set(
            ("volume", token_address),
            lambda: self.provider.fetch_volume_24h(token_address),
        )

    def invalidate(self, token_address: str) -> None:
        """Drop cached price and volume entries for a token."""
        self.price_cache.delete(("price", token_address))
        self.token_cache.delete(("volume", token_address))
