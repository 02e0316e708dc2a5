"""
Configuration schema validation using Pydantic
"""

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"


def _as_decimal(value: str, field_name: str) -> Decimal:
    try:
        number = Decimal(value)
    except (InvalidOperation, TypeError):
        raise ValueError(f"{field_name} must be a decimal string, got {value!r}")
    if not number.is_finite():
        raise ValueError(f"{field_name} must be finite, got {value!r}")
    return number


class NetworkConfig(BaseModel):
    """RPC connection configuration"""

    name: str = Field(default="ethereum", min_length=1)
    chain_id: int = Field(ge=1, default=1)
    rpc_url: Optional[str] = Field(
        default=None, description="Fallback RPC URL if rpc_url_env is unset"
    )
    rpc_url_env: str = Field(
        default="RPC_URL", description="Environment variable holding the RPC URL"
    )
    max_retries: int = Field(ge=1, le=10, default=3)


class PoolConfig(BaseModel):
    """Target pool configuration"""

    pair_address: Optional[str] = Field(default=None, pattern=ADDRESS_PATTERN)
    base_token_address: Optional[str] = Field(
        default=None,
        pattern=ADDRESS_PATTERN,
        description="Token both attacker and victim sell (usually WETH)",
    )
    fee_bps: int = Field(ge=0, lt=10000, default=30)
    base_decimals: int = Field(ge=0, le=36, default=18)
    quote_decimals: int = Field(ge=0, le=36, default=18)

    @model_validator(mode="after")
    def validate_addresses(self):
        if self.pair_address and not self.base_token_address:
            raise ValueError("base_token_address required when pair_address is set")
        return self


class SearchConfig(BaseModel):
    """Frontrun search bracket, in base-token units (e.g. "100" = 100 ETH)"""

    lower_bound: str = "0"
    upper_bound: str = "100"
    tolerance: str = Field(
        default="0.01", description="Relative tolerance as a fraction (0.01 = 1%)"
    )

    @field_validator("lower_bound", "upper_bound", mode="before")
    @classmethod
    def validate_bound(cls, v, info):
        if isinstance(v, float):
            raise ValueError(f"{info.field_name} must be quoted to avoid float rounding")
        v = str(v)
        if _as_decimal(v, info.field_name) < 0:
            raise ValueError(f"{info.field_name} cannot be negative: {v}")
        return v

    @field_validator("tolerance", mode="before")
    @classmethod
    def validate_tolerance(cls, v):
        v = str(v)
        number = _as_decimal(v, "tolerance")
        if not Decimal(0) < number < Decimal(1):
            raise ValueError(f"tolerance must be between 0 and 1: {v}")
        return v

    @model_validator(mode="after")
    def validate_bracket(self):
        if Decimal(self.lower_bound) >= Decimal(self.upper_bound):
            raise ValueError("lower_bound must be less than upper_bound")
        return self


class OutputConfig(BaseModel):
    """Report output configuration"""

    hex_output: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class SandwichConfig(BaseModel):
    """Complete calculator configuration schema"""

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    pool: PoolConfig = Field(default_factory=PoolConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    model_config = {
        "extra": "forbid",  # Disallow extra fields
        "validate_assignment": True,
    }


def validate_sandwich_config(config_dict: Dict) -> SandwichConfig:
    """
    Validate a calculator configuration dictionary

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    return SandwichConfig(**config_dict)


def validate_config_file(config_path: Union[str, Path]) -> SandwichConfig:
    """
    Validate a calculator configuration file

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated SandwichConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If configuration is invalid
        yaml.YAMLError: If YAML parsing fails
    """
    import yaml

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        raise ValueError("Configuration file is empty or invalid")

    return validate_sandwich_config(config_dict)
