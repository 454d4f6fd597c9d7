"""
SolMACD - Technical and statistical analysis core for Solana tokens.

Computes MACD indicators, risk statistics, market regime and divergence
signals over historical price candles, and simulates MACD-driven trading
strategies with a bar-by-bar backtest engine.
"""

__version__ = "0.1.0"
__author__ = "SolMACD Team"
