"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import ConfigurationError
from .defaults import (
    BacktestParams,
    CacheParams,
    CorrelationParams,
    DefaultConfig,
    DivergenceParams,
    MACDParams,
    RegimeParams,
    StatisticsParams,
    get_default_config,
)
from .validation import ConfigValidator

_SECTION_TYPES = {
    "macd": MACDParams,
    "statistics": StatisticsParams,
    "regime": RegimeParams,
    "divergence": DivergenceParams,
    "backtest": BacktestParams,
    "correlation": CorrelationParams,
    "cache": CacheParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Union[str, Path]] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_token_config(self, token_address: str) -> dict[str, Any]:
        """Load token-specific configuration overrides."""
        tokens_file = self.config_dir / "tokens.yaml"

        if not tokens_file.exists():
            return {}

        with open(tokens_file) as f:
            tokens_config = yaml.safe_load(f) or {}

        return tokens_config.get("tokens", {}).get(token_address, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        token_address: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-request overrides (highest priority)
        2. Token-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        token_config = self.load_token_config(token_address)
        config = self._deep_merge(config, token_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(
        self,
        token_address: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Merge and validate configuration, returning typed parameter sets.

        Raises:
            ConfigurationError: If any merged value fails validation
        """
        merged = self.merge_config(token_address, overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            first = errors[0]
            raise ConfigurationError(
                f"Invalid configuration for {first.field}: {first.message}",
                field=first.field,
                value=first.value,
                context={"token_address": token_address, "error_count": len(errors)},
            )

        sections = {}
        for name, section_type in _SECTION_TYPES.items():
            known = {f.name for f in fields(section_type)}
            values = merged.get(name, {})
            unknown = set(values) - known
            if unknown:
                raise ConfigurationError(
                    f"Unknown {name} parameters: {sorted(unknown)}",
                    field=name,
                    value=sorted(unknown),
                )
            sections[name] = section_type(**values)

        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
