"""
Sandwich runner: reads live reserves and evaluates a pending victim trade.

Connects to an RPC node, orients the configured pair so the base token is
the input side, runs the calculator and renders the three legs as a table
and as JSON.
"""

import random
from typing import Optional

from tabulate import tabulate
from web3 import Web3

from sandwich_arbitrage.config_loader import RuntimeConfig
from sandwich_arbitrage.exceptions import ConfigurationError, DataError, NetworkError
from sandwich_arbitrage.utils import get_logger, match, safe_json_dump, stringify_amounts

from .adapters.v2 import fetch_pool
from .base_fee import predict_from_block
from .numeric import format_units
from .sandwich import SandwichCalculator
from .types import PoolState, SandwichOutcome, SandwichQuery

logger = get_logger(__name__)


class SandwichRunner:
    """
    Evaluates sandwiches against a single configured Uniswap V2 pair.

    Offline callers may skip ``connect()`` and pass reserves to
    ``evaluate()`` directly.
    """

    def __init__(self, config: RuntimeConfig, web3: Optional[Web3] = None):
        """
        Initialize runner with config.

        Args:
            config: Normalized RuntimeConfig
            web3: Pre-built Web3 instance (tests, shared connections)
        """
        self.config = config
        self.web3 = web3
        self.calculator = SandwichCalculator(config)

    def connect(self) -> Web3:
        """Open the RPC connection resolved from env or config."""
        rpc_url = self.config.resolve_rpc_url()
        if not rpc_url:
            raise ConfigurationError(
                f"RPC URL environment variable {self.config.rpc_url_env} not set "
                f"and no network.rpc_url in config"
            )

        self.web3 = Web3(Web3.HTTPProvider(rpc_url))
        if not self.web3.is_connected():
            raise NetworkError(f"Failed to connect to RPC at {rpc_url}", endpoint=rpc_url)

        logger.info(f"Connected to {self.config.network} (chain {self.config.chain_id})")
        return self.web3

    def _require_web3(self) -> Web3:
        if self.web3 is None:
            raise NetworkError("Not connected: call connect() first")
        return self.web3

    def fetch_reserves(self) -> PoolState:
        """
        Read the pair's reserves, ordered (base token, other token).

        Raises:
            ConfigurationError: If no pair is configured
            DataError: If the pair does not hold the base token
            NetworkError: If the RPC calls fail
        """
        web3 = self._require_web3()
        if not self.config.pair_address or not self.config.base_token_address:
            raise ConfigurationError("pool.pair_address and pool.base_token_address required")

        pair_addr = Web3.to_checksum_address(self.config.pair_address)
        token0, token1, reserve0, reserve1 = fetch_pool(
            web3, pair_addr, self.config.max_retries
        )

        base = self.config.base_token_address
        if match(base, token0, case_insensitive=True):
            pool = PoolState(reserve_in=reserve0, reserve_out=reserve1)
        elif match(base, token1, case_insensitive=True):
            pool = PoolState(reserve_in=reserve1, reserve_out=reserve0)
        else:
            raise DataError(
                f"Pool {pair_addr} does not contain base token {base}",
                source=pair_addr,
                details={"token0": token0, "token1": token1},
            )

        logger.debug(f"Reserves for {pair_addr}: in={pool.reserve_in} out={pool.reserve_out}")
        return pool

    def evaluate(
        self,
        user_amount_in: int,
        user_min_recv: int,
        pool: Optional[PoolState] = None,
    ) -> Optional[SandwichOutcome]:
        """
        Evaluate the best sandwich around a victim trade.

        Args:
            user_amount_in: Victim input in base-token wei
            user_min_recv: Victim minimum output in quote-token base units
            pool: Reserves to use; fetched from chain when omitted

        Returns:
            SandwichOutcome, or None when no frontrun keeps the victim above
            their floor
        """
        if pool is None:
            pool = self.fetch_reserves()

        query = SandwichQuery(
            user_amount_in=user_amount_in,
            user_min_recv=user_min_recv,
            reserve_in=pool.reserve_in,
            reserve_out=pool.reserve_out,
        )
        return self.calculator.run(query)

    def predict_base_fee(self, rng: Optional[random.Random] = None) -> int:
        """
        Predict the next block's base fee from the latest block.

        Raises:
            NetworkError: If the latest block cannot be read
            DataError: If the block has no EIP-1559 fields
        """
        web3 = self._require_web3()
        try:
            block = web3.eth.get_block("latest")
        except Exception as e:
            rpc_url = self.config.resolve_rpc_url()
            raise NetworkError(f"Failed to fetch latest block: {e}", endpoint=rpc_url) from e

        base_fee = predict_from_block(block, rng)
        logger.debug(f"Predicted next base fee: {base_fee} wei")
        return base_fee

    def render_report(self, outcome: SandwichOutcome) -> str:
        """Render the three legs as a console table in token units."""
        base = self.config.base_decimals
        quote = self.config.quote_decimals

        rows = [
            [
                "frontrun",
                format_units(outcome.attacker_in, base),
                format_units(outcome.frontrun.amount_out, quote),
            ],
            [
                "victim",
                format_units(outcome.user_amount_in, base),
                format_units(outcome.victim.amount_out, quote),
            ],
            [
                "backrun",
                format_units(outcome.frontrun.amount_out, quote),
                format_units(outcome.backrun.amount_out, base),
            ],
        ]
        table = tabulate(
            rows, headers=["Leg", "In", "Out"], tablefmt="simple", disable_numparse=True
        )
        return f"{table}\n\nRevenue: {format_units(outcome.revenue, base)}"

    def render_json(self, outcome: SandwichOutcome) -> str:
        """Render the outcome as JSON with amounts as strings."""
        return safe_json_dump(stringify_amounts(outcome.to_dict(), self.config.hex_output))
