"""
Configuration loading and normalization for the sandwich calculator.

Loads YAML, validates it against the Pydantic schema and converts the
human-readable amounts into an immutable runtime object holding wei.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from dex.numeric import WAD, parse_units

from .config_schema import SandwichConfig, validate_sandwich_config
from .exceptions import ConfigurationError, ValidationError


@dataclass(frozen=True)
class SearchSettings:
    """Normalized frontrun search bracket, in wei, and WAD tolerance."""

    lower_bound: int = 0
    upper_bound: int = 100 * WAD
    tolerance: int = WAD // 100


@dataclass(frozen=True)
class RuntimeConfig:
    """Immutable runtime configuration object."""

    network: str = "ethereum"
    chain_id: int = 1
    rpc_url: Optional[str] = None
    rpc_url_env: str = "RPC_URL"
    max_retries: int = 3
    pair_address: Optional[str] = None
    base_token_address: Optional[str] = None
    fee_bps: int = 30
    base_decimals: int = 18
    quote_decimals: int = 18
    search: SearchSettings = field(default_factory=SearchSettings)
    hex_output: bool = False
    log_level: str = "INFO"

    def resolve_rpc_url(self) -> Optional[str]:
        """RPC URL from the environment, falling back to the configured one."""
        return os.getenv(self.rpc_url_env) or self.rpc_url


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load and parse YAML configuration file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config_dict is None:
        raise ConfigurationError(f"Empty configuration file: {config_path}")
    if not isinstance(config_dict, dict):
        raise ConfigurationError(f"Configuration must be a mapping: {config_path}")

    return config_dict


def normalize_config(config: SandwichConfig) -> RuntimeConfig:
    """Convert a validated schema object into a RuntimeConfig."""
    base_decimals = config.pool.base_decimals
    try:
        search = SearchSettings(
            lower_bound=parse_units(config.search.lower_bound, base_decimals),
            upper_bound=parse_units(config.search.upper_bound, base_decimals),
            tolerance=parse_units(config.search.tolerance, 18),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid search settings: {e}", e.details) from e

    return RuntimeConfig(
        network=config.network.name,
        chain_id=config.network.chain_id,
        rpc_url=config.network.rpc_url,
        rpc_url_env=config.network.rpc_url_env,
        max_retries=config.network.max_retries,
        pair_address=config.pool.pair_address,
        base_token_address=config.pool.base_token_address,
        fee_bps=config.pool.fee_bps,
        base_decimals=base_decimals,
        quote_decimals=config.pool.quote_decimals,
        search=search,
        hex_output=config.output.hex_output,
        log_level=config.output.log_level,
    )


def load_config(config_path: Union[str, Path]) -> RuntimeConfig:
    """
    Load, validate and normalize a calculator configuration file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Frozen RuntimeConfig

    Raises:
        ConfigurationError: If the file cannot be loaded or normalized
        ValidationError: If the configuration fails schema validation
    """
    config_dict = load_yaml_config(config_path)

    try:
        schema = validate_sandwich_config(config_dict)
    except PydanticValidationError as e:
        raise ValidationError(f"Configuration validation failed: {e}") from e

    return normalize_config(schema)


def get_default_config() -> RuntimeConfig:
    """Get a default configuration for offline use and tests."""
    return RuntimeConfig()
