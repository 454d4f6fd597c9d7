"""
Data models and ingestion module.

Candle series handed to the analysis core, payload parsing and the
market-data provider interface.
"""
