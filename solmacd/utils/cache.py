"""
Expiring key/value cache with an injectable clock.

Owned by whichever component needs it; nothing in the package keeps a
process-wide cache instance.
"""

import time
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheItem(Generic[T]):
    """Cached value with its insertion and expiry times (clock seconds)."""
    data: T
    timestamp: float
    expires_at: float


class TTLCache(Generic[T]):
    """Map of keys to values that expire after a time-to-live."""

    def __init__(self, default_ttl: float = 300.0,
                 clock: Optional[Callable[[], float]] = None):
        """
        Args:
            default_ttl: Lifetime in seconds for entries stored without a TTL
            clock: Zero-argument callable returning seconds, defaults to time.monotonic
        """
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {default_ttl}")
        self.default_ttl = default_ttl
        self._clock = clock or time.monotonic
        self._items: dict[Hashable, CacheItem[T]] = {}

    def set(self, key: Hashable, data: T, ttl: Optional[float] = None) -> None:
        """Store a value; expired entries are purged first."""
        self._clean_expired()
        now = self._clock()
        lifetime = ttl if ttl is not None else self.default_ttl
        self._items[key] = CacheItem(data=data, timestamp=now, expires_at=now + lifetime)

    def get(self, key: Hashable) -> Optional[T]:
        item = self._items.get(key)
        if item is None:
            return None

        if self._clock() > item.expires_at:
            del self._items[key]
            return None

        return item.data

    def has(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def delete(self, key: Hashable) -> bool:
        return self._items.pop(key, None) is not None

    def clear(self) -> None:
        self._items.clear()

    def size(self) -> int:
        """Number of live entries; expired entries are purged first."""
        self._clean_expired()
        return len(self._items)

    def get_or_set(self, key: Hashable, factory: Callable[[], T],
                   ttl: Optional[float] = None) -> T:
        """Return the cached value, computing and storing it on a miss."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = factory()
        self.set(key, value, ttl)
        return value

    def _clean_expired(self) -> None:
        now = self._clock()
        expired = [key for key, item in self._items.items() if now > item.expires_at]
        for key in expired:
            del self._items[key]
