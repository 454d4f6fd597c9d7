"""
Utility functions module.

Numeric helpers, the explicit TTL cache used by the market-data wrapper,
and timestamp conversions.

Time Semantics:
- Candle timestamps are epoch milliseconds supplied by the data provider
- Wall-clock time is only used to stamp results and expire cache entries
- Both clocks are injectable so results can be pinned in tests
"""
