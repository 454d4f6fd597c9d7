"""Default configuration parameters for the analysis core."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MACDParams:
    """MACD periods and adaptive scaling bounds."""
    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9

    # Adaptive mode
    adaptive_volatility: float = 0.02                # Volatility fed to calculate_adaptive
    min_vol_multiplier: float = 0.5
    max_vol_multiplier: float = 2.0


@dataclass(frozen=True)
class StatisticsParams:
    """Risk statistics parameters."""
    risk_free_rate: float = 0.02                     # Annual risk-free rate
    periods_per_year: int = 252                      # Annualization factor
    var_confidence: float = 0.95
    max_kelly_pct: float = 25.0                      # Kelly cap in percent


@dataclass(frozen=True)
class RegimeParams:
    """Market regime detection parameters."""
    min_history: int = 50
    short_ema: int = 20
    long_ema: int = 50

    # Confidence adjustments
    high_volatility: float = 0.03                    # Return std above which confidence is cut
    volatility_penalty: float = 0.8
    transition_base: float = 50.0
    transition_jitter: float = 10.0                  # +/- jitter around transition_base

    # Volume confirmation
    volume_window: int = 10
    volume_ratio_min: float = 0.5
    volume_ratio_max: float = 1.5

    # HMM path
    hmm_window: int = 10                             # Observations scored by detect_hmm
    hmm_return_threshold: float = 0.01               # |return| above which a move is directional

    change_confidence: float = 60.0                  # Min confidence to report a regime change


@dataclass(frozen=True)
class DivergenceParams:
    """Price/MACD divergence detection parameters."""
    min_points: int = 20
    threshold: float = 0.1


@dataclass(frozen=True)
class BacktestParams:
    """Backtest simulation parameters."""
    initial_capital: float = 10000.0
    position_size: float = 0.1                       # Fraction of capital per entry
    stop_loss: float = 0.02                          # 0 disables
    take_profit: float = 0.0                         # 0 disables
    commission: float = 0.001
    slippage: float = 0.001
    warmup_bars: int = 30

    # Walk-forward analysis
    walk_forward_window: int = 100
    walk_forward_step: int = 20


@dataclass(frozen=True)
class CorrelationParams:
    """Correlation regime thresholds."""
    high: float = 0.7
    low: float = 0.3
    rolling_window: int = 20
    max_lag: int = 20


@dataclass(frozen=True)
class CacheParams:
    """Market data cache TTLs."""
    price_ttl_seconds: float = 60.0
    token_ttl_seconds: float = 300.0


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    macd: MACDParams
    statistics: StatisticsParams
    regime: RegimeParams
    divergence: DivergenceParams
    backtest: BacktestParams
    correlation: CorrelationParams
    cache: CacheParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        macd=MACDParams(),
        statistics=StatisticsParams(),
        regime=RegimeParams(),
        divergence=DivergenceParams(),
        backtest=BacktestParams(),
        correlation=CorrelationParams(),
        cache=CacheParams(),
    )
