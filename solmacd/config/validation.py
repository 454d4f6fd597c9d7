"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_macd_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate MACD parameters."""
        errors = []

        for name in ("fast_period", "slow_period", "signal_period"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        # Fast EMA must react faster than slow EMA
        fast = params.get("fast_period")
        slow = params.get("slow_period")
        if _is_int(fast) and _is_int(slow) and 0 < slow <= fast:
            errors.append(ValidationError(
                field="fast_period",
                message="Must be smaller than slow_period",
                value=fast
            ))

        if "adaptive_volatility" in params:
            value = params["adaptive_volatility"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="adaptive_volatility",
                    message="Must be a non-negative number",
                    value=value
                ))

        low = params.get("min_vol_multiplier")
        high = params.get("max_vol_multiplier")
        for name, value in (("min_vol_multiplier", low), ("max_vol_multiplier", high)):
            if name in params and (not _is_number(value) or value <= 0):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive number",
                    value=value
                ))
        if _is_number(low) and _is_number(high) and low > high:
            errors.append(ValidationError(
                field="min_vol_multiplier",
                message="Must not exceed max_vol_multiplier",
                value=low
            ))

        return errors

    @staticmethod
    def validate_statistics_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate statistics parameters."""
        errors = []

        if "risk_free_rate" in params:
            value = params["risk_free_rate"]
            if not _is_number(value):
                errors.append(ValidationError(
                    field="risk_free_rate",
                    message="Must be a number",
                    value=value
                ))

        if "periods_per_year" in params:
            value = params["periods_per_year"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="periods_per_year",
                    message="Must be a positive integer",
                    value=value
                ))

        if "var_confidence" in params:
            value = params["var_confidence"]
            if not _is_number(value) or value <= 0 or value >= 1:
                errors.append(ValidationError(
                    field="var_confidence",
                    message="Must be a number strictly between 0 and 1",
                    value=value
                ))

        if "max_kelly_pct" in params:
            value = params["max_kelly_pct"]
            if not _is_number(value) or value < 0 or value > 25:
                errors.append(ValidationError(
                    field="max_kelly_pct",
                    message="Must be a number between 0 and 25",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_backtest_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate backtest parameters."""
        errors = []

        if "initial_capital" in params:
            value = params["initial_capital"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="initial_capital",
                    message="Must be a positive number",
                    value=value
                ))

        if "position_size" in params:
            value = params["position_size"]
            if not _is_number(value) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    field="position_size",
                    message="Must be a positive number between 0 and 1",
                    value=value
                ))

        for name in ("stop_loss", "take_profit", "commission", "slippage"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value >= 1:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number below 1",
                        value=value
                    ))

        if "warmup_bars" in params:
            value = params["warmup_bars"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="warmup_bars",
                    message="Must be a non-negative integer",
                    value=value
                ))

        for name in ("walk_forward_window", "walk_forward_step"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_window_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate integer window lengths used by regime, divergence and correlation."""
        errors = []

        for name in ("min_history", "short_ema", "long_ema", "volume_window",
                     "hmm_window", "min_points", "rolling_window", "max_lag"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "macd" in config:
            errors.extend(ConfigValidator.validate_macd_params(config["macd"]))

        if "statistics" in config:
            errors.extend(ConfigValidator.validate_statistics_params(config["statistics"]))

        if "backtest" in config:
            errors.extend(ConfigValidator.validate_backtest_params(config["backtest"]))

        for section in ("regime", "divergence", "correlation"):
            if section in config:
                errors.extend(ConfigValidator.validate_window_params(config[section]))

        return errors
