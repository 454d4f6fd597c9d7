#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from solmacd.config.loader import ConfigLoader
from solmacd.config.validation import ConfigValidator, ValidationError
from solmacd.errors import ConfigurationError


def validate_token_config(loader: ConfigLoader, token_address: str) -> List[ValidationError]:
    """Validate merged configuration for a specific token."""
    config = loader.merge_config(token_address)
    return ConfigValidator.validate_config(config)


def configured_tokens(loader: ConfigLoader) -> List[str]:
    tokens_file = loader.config_dir / "tokens.yaml"
    if not tokens_file.exists():
        return []
    with open(tokens_file) as f:
        return list((yaml.safe_load(f) or {}).get("tokens", {}) or {})


def main():
    """Main validation function."""
    print("🔍 Validating SolMACD configuration...")

    loader = ConfigLoader.create()
    token_addresses = configured_tokens(loader) + ["UNKNOWN-TOKEN"]  # Should use defaults

    all_valid = True

    for token_address in token_addresses:
        print(f"\n📊 Validating {token_address}...")

        errors = validate_token_config(loader, token_address)
        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
            continue

        try:
            loader.load_config(token_address)
            print(f"✅ {token_address} configuration is valid")
        except ConfigurationError as e:
            print(f"❌ Error loading {token_address}: {e}")
            all_valid = False

    print("\n📋 Testing request-level overrides...")
    test_overrides = {
        "macd": {"fast_period": 5, "slow_period": 35},
        "backtest": {"stop_loss": 0.03},
    }

    try:
        config = loader.load_config("UNKNOWN-TOKEN", test_overrides)
        print(f"✅ Request override validation passed (fast={config.macd.fast_period}, "
              f"slow={config.macd.slow_period})")
    except ConfigurationError as e:
        print(f"❌ Request override validation failed: {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
