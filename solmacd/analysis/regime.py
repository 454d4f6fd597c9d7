"""Market regime detection from EMA trend structure, volatility and volume"""

import random
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

import structlog

from ..config.defaults import RegimeParams
from ..indicators.ema import calculate_ema
from ..logging.config import log_regime_change
from ..models.indicators import MarketRegime, Regime
from ..statistics.distribution import calculate_returns, std_dev
from ..utils.math import clamp

logger = structlog.get_logger(__name__)

# States scored by the hidden-Markov path, in tie-break order
HMM_STATES: tuple[Regime, ...] = (Regime.BULLISH, Regime.BEARISH, Regime.NEUTRAL)

# P(next state | current state)
TRANSITION_PROBABILITIES: Mapping[Regime, Mapping[Regime, float]] = MappingProxyType({
    Regime.BULLISH: MappingProxyType({Regime.BULLISH: 0.7, Regime.BEARISH: 0.1, Regime.NEUTRAL: 0.2}),
    Regime.BEARISH: MappingProxyType({Regime.BULLISH: 0.1, Regime.BEARISH: 0.7, Regime.NEUTRAL: 0.2}),
    Regime.NEUTRAL: MappingProxyType({Regime.BULLISH: 0.3, Regime.BEARISH: 0.3, Regime.NEUTRAL: 0.4}),
})

# Direction of the return observation each state emits most often
_STATE_DIRECTION: Mapping[Regime, int] = MappingProxyType({
    Regime.BULLISH: 1,
    Regime.BEARISH: -1,
    Regime.NEUTRAL: 0,
})

# Per-state score: starts at the prior and is scaled once per scored observation
_STATE_PRIOR = 0.33
_MATCH_FACTOR = 1.2
_MISMATCH_FACTOR = 0.8


class RegimeDetector:
    """
    Classifies the market as BULLISH, BEARISH, NEUTRAL or TRANSITION

    Two independent strategies are exposed: detect() (EMA structure, primary)
    and detect_hmm() (scoring of ternary return observations). They may
    disagree on the same input.
    """

    def __init__(self, params: Optional[RegimeParams] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            params: Regime parameters
            rng: Random source for the TRANSITION confidence jitter
        """
        self.params = params or RegimeParams()
        self.rng = rng or random.Random()

    def detect(self, prices: Sequence[float],
               volumes: Optional[Sequence[float]] = None) -> MarketRegime:
        """
        Detect regime from price vs short/long EMA ordering

        price > EMA(short) > EMA(long) is BULLISH, price < EMA(short) < EMA(long)
        is BEARISH, anything else is TRANSITION. Fewer than min_history prices
        gives NEUTRAL with zero confidence.
        """
        p = self.params
        if len(prices) < p.min_history:
            logger.debug("Insufficient prices for regime detection",
                         required=p.min_history, available=len(prices))
            return MarketRegime.neutral()

        ema_short = calculate_ema(prices[-p.short_ema:], p.short_ema)
        ema_long = calculate_ema(prices[-p.long_ema:], p.long_ema)
        current_price = prices[-1]

        if ema_short <= 0 or ema_long <= 0:
            logger.debug("Non-positive EMA in regime detection",
                         ema_short=ema_short, ema_long=ema_long)
            return MarketRegime.neutral()

        volatility = std_dev(calculate_returns(prices))

        if current_price > ema_short > ema_long:
            regime = Regime.BULLISH
            trend = (current_price / ema_long - 1) * 100
            confidence = min(abs(trend) * 2, 100.0)
        elif current_price < ema_short < ema_long:
            regime = Regime.BEARISH
            trend = (current_price / ema_long - 1) * 100
            confidence = min(abs(trend) * 2, 100.0)
        else:
            regime = Regime.TRANSITION
            trend = (current_price / ema_short - 1) * 100
            jitter = self.rng.random() * 2 * p.transition_jitter - p.transition_jitter
            confidence = p.transition_base + jitter

        if volatility > p.high_volatility:
            confidence *= p.volatility_penalty

        if volumes:
            confidence *= self.analyze_volume_trend(volumes)

        return MarketRegime(
            regime=regime,
            confidence=clamp(confidence, 0.0, 100.0),
            trend=trend,
            volatility=volatility * 100,
        )

    def detect_hmm(self, prices: Sequence[float]) -> MarketRegime:
        """
        Detect regime by scoring ternary return observations per state

        Each return becomes +1, -1 or 0 around hmm_return_threshold. Every
        state scores the last hmm_window observations (see state_score); the
        highest score wins, ties going to the earlier state in HMM_STATES, and
        the score times 100 is the confidence.
        """
        if len(prices) < 2:
            return MarketRegime.neutral()

        returns = calculate_returns(prices)
        recent = self.get_observations(returns)[-self.params.hmm_window:]

        current_state = Regime.NEUTRAL
        max_prob = 0.0
        for state in HMM_STATES:
            prob = self.state_score(state, recent)
            if prob > max_prob:
                max_prob = prob
                current_state = state

        return MarketRegime(
            regime=current_state,
            confidence=clamp(max_prob * 100, 0.0, 100.0),
            trend=self.calculate_trend(prices),
            volatility=std_dev(returns) * 100,
        )

    def detect_regime_change(self, current: MarketRegime, previous: MarketRegime) -> bool:
        """True when the regime differs and the new one is held with enough confidence"""
        changed = (current.regime != previous.regime and
                   current.confidence > self.params.change_confidence)
        if changed:
            log_regime_change(logger, previous, current)
        return changed

    def analyze_volume_trend(self, volumes: Sequence[float]) -> float:
        """
        Ratio of recent to prior average volume, clamped

        Uses two back-to-back windows of volume_window bars; returns 1 when
        there is not enough history or the prior average is 0.
        """
        window = self.params.volume_window
        if len(volumes) < 2 * window:
            return 1.0

        recent = sum(volumes[-window:]) / window
        prior = sum(volumes[-2 * window:-window]) / window
        if prior == 0:
            return 1.0

        return clamp(recent / prior, self.params.volume_ratio_min, self.params.volume_ratio_max)

    def get_observations(self, returns: Sequence[float]) -> list[int]:
        threshold = self.params.hmm_return_threshold
        observations = []
        for r in returns:
            if r > threshold:
                observations.append(1)
            elif r < -threshold:
                observations.append(-1)
            else:
                observations.append(0)
        return observations

    def calculate_trend(self, prices: Sequence[float]) -> float:
        """Percent change over the last 20 bars (or the whole series if shorter)"""
        if len(prices) < 2:
            return 0.0

        first = prices[max(0, len(prices) - 20)]
        if first == 0:
            return 0.0

        return (prices[-1] - first) / first * 100

    @staticmethod
    def state_score(state: Regime, observations: Sequence[int]) -> float:
        """
        Likelihood-style score of one state, capped at 1

        0.33, multiplied by 1.2 for each observation matching the state's
        direction and by 0.8 for each one that does not.
        """
        direction = _STATE_DIRECTION[state]
        score = _STATE_PRIOR
        for observation in observations:
            score *= _MATCH_FACTOR if observation == direction else _MISMATCH_FACTOR
        return min(score, 1.0)
