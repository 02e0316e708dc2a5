"""
Unit tests for configuration validation
"""

import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from sandwich_arbitrage.config_schema import (
    NetworkConfig,
    OutputConfig,
    PoolConfig,
    SandwichConfig,
    SearchConfig,
    validate_config_file,
    validate_sandwich_config,
)

PAIR = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


class TestNetworkConfig(unittest.TestCase):
    """Test network configuration validation"""

    def test_defaults(self):
        config = NetworkConfig()
        self.assertEqual(config.name, "ethereum")
        self.assertEqual(config.rpc_url_env, "RPC_URL")
        self.assertEqual(config.max_retries, 3)

    def test_invalid_chain_id(self):
        with self.assertRaises(ValidationError):
            NetworkConfig(chain_id=0)

    def test_retry_range(self):
        with self.assertRaises(ValidationError):
            NetworkConfig(max_retries=0)
        with self.assertRaises(ValidationError):
            NetworkConfig(max_retries=11)


class TestPoolConfig(unittest.TestCase):
    """Test pool configuration validation"""

    def test_valid_pool(self):
        config = PoolConfig(pair_address=PAIR, base_token_address=WETH, quote_decimals=6)
        self.assertEqual(config.fee_bps, 30)
        self.assertEqual(config.quote_decimals, 6)

    def test_invalid_address(self):
        with self.assertRaises(ValidationError):
            PoolConfig(pair_address="0x1234", base_token_address=WETH)

    def test_pair_requires_base_token(self):
        with self.assertRaises(ValidationError) as ctx:
            PoolConfig(pair_address=PAIR)
        self.assertIn("base_token_address required", str(ctx.exception))

    def test_fee_range(self):
        PoolConfig(fee_bps=0)
        PoolConfig(fee_bps=9999)
        with self.assertRaises(ValidationError):
            PoolConfig(fee_bps=10000)
        with self.assertRaises(ValidationError):
            PoolConfig(fee_bps=-1)


class TestSearchConfig(unittest.TestCase):
    """Test search bracket validation"""

    def test_defaults(self):
        config = SearchConfig()
        self.assertEqual(config.lower_bound, "0")
        self.assertEqual(config.upper_bound, "100")
        self.assertEqual(config.tolerance, "0.01")

    def test_int_bounds_coerced_to_strings(self):
        config = SearchConfig(lower_bound=1, upper_bound=50)
        self.assertEqual(config.upper_bound, "50")

    def test_float_bounds_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            SearchConfig(upper_bound=100.5)
        self.assertIn("quoted", str(ctx.exception))

    def test_negative_bound_rejected(self):
        with self.assertRaises(ValidationError):
            SearchConfig(lower_bound="-1")

    def test_non_numeric_bound_rejected(self):
        with self.assertRaises(ValidationError):
            SearchConfig(upper_bound="lots")

    def test_inverted_bracket_rejected(self):
        with self.assertRaises(ValidationError):
            SearchConfig(lower_bound="10", upper_bound="10")

    def test_tolerance_range(self):
        SearchConfig(tolerance="0.5")
        for bad in ["0", "1", "-0.1", "2"]:
            with self.assertRaises(ValidationError):
                SearchConfig(tolerance=bad)


class TestSandwichConfig(unittest.TestCase):
    """Test the complete schema"""

    def test_empty_dict_uses_defaults(self):
        config = validate_sandwich_config({})
        self.assertIsInstance(config.network, NetworkConfig)
        self.assertIsInstance(config.output, OutputConfig)
        self.assertFalse(config.output.hex_output)

    def test_extra_fields_forbidden(self):
        with self.assertRaises(ValidationError):
            validate_sandwich_config({"unknown": {}})

    def test_invalid_log_level(self):
        with self.assertRaises(ValidationError):
            validate_sandwich_config({"output": {"log_level": "TRACE"}})

    def test_validate_assignment(self):
        config = SandwichConfig()
        with self.assertRaises(ValidationError):
            config.pool = {"fee_bps": 20000}


class TestValidateConfigFile(unittest.TestCase):
    """Test file-level validation"""

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            validate_config_file("/non/existent/sandwich.yaml")

    def test_empty_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.yaml"
            path.write_text("")
            with self.assertRaises(ValueError):
                validate_config_file(path)

    def test_valid_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sandwich.yaml"
            path.write_text(
                f"pool:\n  pair_address: \"{PAIR}\"\n  base_token_address: \"{WETH}\"\n"
            )
            config = validate_config_file(path)
        self.assertEqual(config.pool.pair_address, PAIR)


if __name__ == "__main__":
    unittest.main()
