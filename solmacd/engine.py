"""
Main analysis engine coordinator.

Entry point for consumers (dashboard, report generator): turns already
fetched price arrays into indicators, statistics, regime and divergence
signals, and runs strategy backtests.

Pipeline:
Candles → EMA → MACD → {Regime, Divergence, Backtest} → Statistics
"""

import random
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar, Union

from .analysis.backtest import BacktestEngine, Strategy
from .analysis.divergence import DivergenceDetector
from .analysis.regime import RegimeDetector
from .analysis.strategies import get_strategy
from .config.defaults import BacktestParams, DefaultConfig
from .config.loader import ConfigLoader
from .data.models import Candle
from .data.provider import CachedMarketData, MarketDataProvider
from .data.validators import validate_series
from .errors import (
    ConfigurationError,
    DataQualityError,
    MetricsCalculationError,
    SystemFailureError,
)
from .indicators.macd import MACDCalculator
from .logging.config import get_analysis_logger
from .models.indicators import DivergenceSignal, MACDResult, MarketRegime
from .models.report import TokenAnalysis
from .models.statistics import StatisticalMetrics
from .models.trading import BacktestResult, WalkForwardResult
from .statistics.analyzer import StatisticalAnalyzer
from .statistics.correlation import CorrelationAnalyzer
from .statistics.distribution import calculate_returns

analysis_logger = get_analysis_logger(__name__)

T = TypeVar("T")


class AnalysisMode(str, Enum):
    """MACD computation mode."""
    STANDARD = "STANDARD"
    ADAPTIVE = "ADAPTIVE"


class RegimeMethod(str, Enum):
    """Regime detection strategy."""
    EMA = "EMA"
    HMM = "HMM"


def _coerce_enum(enum_type: type, value: Union[str, Enum], field: str) -> Any:
    try:
        return enum_type(value.upper() if isinstance(value, str) else value)
    except ValueError:
        raise ConfigurationError(
            f"Unknown {field}: {value}",
            field=field,
            value=value,
            context={"available": [member.value for member in enum_type]},
        )


class AnalysisEngine:
    """
    Coordinator for the indicator, statistics and backtest pipeline.

    Every call is independent: components are built from the effective
    configuration per call and share no mutable state between calls.
    """

    def __init__(self, config_dir: Optional[str] = None,
                 provider: Optional[MarketDataProvider] = None,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], float]] = None) -> None:
        """
        Initialize the analysis engine.

        Args:
            config_dir: Directory holding tokens.yaml overrides
            provider: Market-data collaborator used by analyze_token
            rng: Random source for regime TRANSITION jitter
            clock: Epoch-seconds clock for result timestamps
        """
        self.logger = analysis_logger
        self.config_loader = ConfigLoader.create(config_dir)
        self.config = self.config_loader.defaults
        self.rng = rng
        self.clock = clock

        self.market_data: Optional[CachedMarketData] = None
        if provider is not None:
            self.market_data = CachedMarketData(provider, self.config.cache)

        self.logger.info("Analysis engine initialized",
                         config_dir=str(self.config_loader.config_dir),
                         has_provider=provider is not None)

    def config_for(self, token_address: str,
                   overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Effective configuration for a token: defaults < tokens.yaml < overrides."""
        return self.config_loader.load_config(token_address, overrides)

    def compute_indicators(self, prices: Sequence[float],
                           mode: Union[str, AnalysisMode] = AnalysisMode.STANDARD,
                           volatility: Optional[float] = None,
                           config: Optional[DefaultConfig] = None) -> MACDResult:
        """
        Compute MACD in STANDARD or ADAPTIVE mode.

        Args:
            prices: Close prices in chronological order
            mode: STANDARD (fixed periods) or ADAPTIVE (volatility-scaled periods)
            volatility: Adaptive scaling input, defaults to macd.adaptive_volatility
            config: Effective configuration, defaults to global defaults
        """
        cfg = config or self.config
        analysis_mode = _coerce_enum(AnalysisMode, mode, "mode")
        calculator = self._macd_calculator(cfg)

        def compute() -> MACDResult:
            if analysis_mode == AnalysisMode.ADAPTIVE:
                vol = cfg.macd.adaptive_volatility if volatility is None else volatility
                return calculator.calculate_adaptive(prices, vol)
            return calculator.calculate(prices)

        return self._guard("macd", compute, {"price_count": len(prices), "mode": analysis_mode.value})

    def compute_statistics(self, prices: Sequence[float],
                           returns: Optional[Sequence[float]] = None,
                           benchmarks: Optional[Mapping[str, Sequence[float]]] = None,
                           config: Optional[DefaultConfig] = None) -> StatisticalMetrics:
        """
        Compute risk statistics for a price/return series.

        Args:
            prices: Close prices (drawdown input)
            returns: Per-period returns, derived from prices when omitted
            benchmarks: Named return series of the same length as returns;
                the correlation matrix covers returns followed by each benchmark
            config: Effective configuration
        """
        cfg = config or self.config
        analyzer = StatisticalAnalyzer(
            cfg.statistics,
            CorrelationAnalyzer(cfg.correlation.high, cfg.correlation.low),
        )
        series = list(returns) if returns is not None else calculate_returns(prices)
        datasets = [series, *benchmarks.values()] if benchmarks else None

        return self._guard(
            "statistics",
            lambda: analyzer.calculate_all_metrics(prices, series, datasets),
            {"price_count": len(prices), "return_count": len(series)},
        )

    def compute_regime(self, prices: Sequence[float],
                       volumes: Optional[Sequence[float]] = None,
                       method: Union[str, RegimeMethod] = RegimeMethod.EMA,
                       config: Optional[DefaultConfig] = None) -> MarketRegime:
        """Classify the market regime with the EMA (primary) or HMM detector."""
        cfg = config or self.config
        regime_method = _coerce_enum(RegimeMethod, method, "method")
        detector = RegimeDetector(cfg.regime, self.rng)

        def compute() -> MarketRegime:
            if regime_method == RegimeMethod.HMM:
                return detector.detect_hmm(prices)
            return detector.detect(prices, volumes)

        return self._guard("regime", compute, {"price_count": len(prices), "method": regime_method.value})

    def compute_divergence(self, prices: Sequence[float],
                           macd_history: Optional[Sequence[float]] = None,
                           config: Optional[DefaultConfig] = None) -> DivergenceSignal:
        """Detect price/MACD divergence; MACD history is computed when not supplied."""
        cfg = config or self.config
        if macd_history is None:
            macd_history = self.compute_indicators(prices, config=cfg).macd_history

        detector = DivergenceDetector(cfg.divergence)
        return self._guard(
            "divergence",
            lambda: detector.detect(prices, macd_history),
            {"price_count": len(prices), "macd_count": len(macd_history)},
        )

    def run_backtest(self, candles: Sequence[Candle],
                     strategy: Union[str, Strategy] = "MACD_CROSSOVER",
                     config: Optional[BacktestParams] = None,
                     macd_config: Optional[DefaultConfig] = None) -> BacktestResult:
        """
        Backtest a strategy over candles.

        Args:
            candles: Candles in chronological order
            strategy: Registered strategy name or callable
            config: Backtest parameters, defaults to backtest defaults
            macd_config: Configuration supplying MACD and statistics parameters

        Raises:
            TemporalDataError: If candles are out of order
        """
        engine = self._backtest_engine(config, macd_config)
        strategy_fn = get_strategy(strategy) if isinstance(strategy, str) else strategy

        validate_series(candles)
        result = self._guard("backtest", lambda: engine.run_backtest(candles, strategy_fn),
                             {"candle_count": len(candles)})

        self.logger.info("Backtest complete", candles=len(candles),
                         trades=len(result.trades),
                         total_return=result.metrics.total_return)
        return result

    def run_walk_forward(self, candles: Sequence[Candle],
                         strategy: Union[str, Strategy] = "MACD_CROSSOVER",
                         config: Optional[BacktestParams] = None,
                         window_size: Optional[int] = None,
                         step_size: Optional[int] = None,
                         macd_config: Optional[DefaultConfig] = None) -> WalkForwardResult:
        """Walk-forward analysis over rolling in-sample/out-of-sample windows."""
        engine = self._backtest_engine(config, macd_config)
        strategy_fn = get_strategy(strategy) if isinstance(strategy, str) else strategy

        validate_series(candles)
        return self._guard(
            "walk_forward",
            lambda: engine.run_walk_forward_analysis(candles, strategy_fn, window_size, step_size),
            {"candle_count": len(candles)},
        )

    def analyze_token(self, token_address: str, interval: str = "5m", limit: int = 200,
                      mode: Union[str, AnalysisMode] = AnalysisMode.STANDARD,
                      overrides: Optional[dict[str, Any]] = None) -> TokenAnalysis:
        """
        Fetch candles for a token and run the full indicator pipeline.

        Raises:
            ConfigurationError: If the engine has no market-data provider
        """
        if self.market_data is None:
            raise ConfigurationError("analyze_token requires a market-data provider",
                                     field="provider")

        cfg = self.config_for(token_address, overrides)
        series = self.market_data.fetch_candles(token_address, interval, limit)
        validate_series(series)

        prices = series.closes
        calculator = self._macd_calculator(cfg)
        indicators = self.compute_indicators(prices, mode, config=cfg)
        divergence = self.compute_divergence(prices, indicators.macd_history, config=cfg)

        analysis = TokenAnalysis(
            token_address=token_address,
            interval=interval,
            candle_count=len(series),
            last_price=series.last_close,
            indicators=indicators,
            signal_strength=calculator.validate_signal_strength(indicators),
            momentum=calculator.calculate_momentum(indicators.macd_history),
            statistics=self.compute_statistics(prices, series.returns, config=cfg),
            regime=self.compute_regime(prices, series.volumes, config=cfg),
            divergence=divergence,
            divergence_score=DivergenceDetector(cfg.divergence).calculate_divergence_score(divergence),
        )

        self.logger.info("Token analysis complete",
                         token_address=token_address,
                         interval=interval,
                         candles=len(series),
                         regime=analysis.regime.regime.value)
        return analysis

    def _macd_calculator(self, cfg: DefaultConfig) -> MACDCalculator:
        return MACDCalculator(
            fast_period=cfg.macd.fast_period,
            slow_period=cfg.macd.slow_period,
            signal_period=cfg.macd.signal_period,
            min_vol_multiplier=cfg.macd.min_vol_multiplier,
            max_vol_multiplier=cfg.macd.max_vol_multiplier,
            clock=self.clock,
        )

    def _backtest_engine(self, config: Optional[BacktestParams],
                         macd_config: Optional[DefaultConfig]) -> BacktestEngine:
        cfg = macd_config or self.config
        return BacktestEngine(
            config=config or cfg.backtest,
            macd_calculator=self._macd_calculator(cfg),
            stats_analyzer=StatisticalAnalyzer(cfg.statistics),
        )

    def _guard(self, metric_name: str, compute: Callable[[], T],
               calculation_input: Optional[dict[str, Any]] = None) -> T:
        """Run a computation, wrapping unexpected failures in MetricsCalculationError."""
        try:
            return compute()
        except (DataQualityError, SystemFailureError):
            # Re-raise known error types
            raise
        except Exception as e:
            self.logger.error("Calculation failed", metric=metric_name, error=str(e))
            raise MetricsCalculationError(
                f"Unexpected error in {metric_name} calculation: {str(e)}",
                metric_name=metric_name,
                calculation_input=calculation_input,
            ) from e
