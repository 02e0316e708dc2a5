"""
Uniswap V2 style adapter for constant-product AMM pools.

Implements reserve fetching and exact integer swap simulation using the
x*y=k formula with the fee taken from the input amount, rounding the same
way the pair contract does.
"""

import logging
import time
from typing import Tuple

from web3 import Web3

from sandwich_arbitrage.exceptions import NetworkError, ValidationError

from ..numeric import MAX_INT256, require_amount, require_reserve
from ..types import SwapResult

logger = logging.getLogger(__name__)

# Fees are expressed in basis points of the input amount
FEE_DENOMINATOR = 10_000
DEFAULT_FEE_BPS = 30  # 0.30%, i.e. the 997/1000 multiplier

# Minimal Uniswap V2 pair ABI
UNISWAP_V2_PAIR_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "getReserves",
        "outputs": [
            {"name": "reserve0", "type": "uint112"},
            {"name": "reserve1", "type": "uint112"},
            {"name": "blockTimestampLast", "type": "uint32"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "token0",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "token1",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]


def fetch_pool(
    web3: Web3, pair_addr: str, max_retries: int = 3
) -> Tuple[str, str, int, int]:
    """
    Fetch token addresses and reserves from a Uniswap V2 style pair.

    Args:
        web3: Web3 instance connected to the chain
        pair_addr: Checksummed address of the pair contract
        max_retries: Maximum number of attempts (default: 3)

    Returns:
        Tuple of (token0_addr, token1_addr, reserve0, reserve1)

    Raises:
        NetworkError: If RPC calls fail after all retries
        ValueError: If pair address is invalid
    """
    if not Web3.is_checksum_address(pair_addr):
        raise ValueError(f"Invalid pair address: {pair_addr}")

    pair = web3.eth.contract(address=pair_addr, abi=UNISWAP_V2_PAIR_ABI)

    last_error = None
    for attempt in range(max_retries):
        try:
            token0 = pair.functions.token0().call()
            token1 = pair.functions.token1().call()
            reserves = pair.functions.getReserves().call()

            return (
                Web3.to_checksum_address(token0),
                Web3.to_checksum_address(token1),
                int(reserves[0]),
                int(reserves[1]),
            )
        except Exception as e:
            last_error = e
            if "429" in str(e) or "Too Many Requests" in str(e):
                if attempt < max_retries - 1:
                    # Exponential backoff: 1s, 2s, 4s
                    wait_time = 2**attempt
                    logger.warning(
                        f"Rate limited fetching {pair_addr}, retrying in {wait_time}s"
                    )
                    time.sleep(wait_time)
                    continue
            raise NetworkError(
                f"Failed to fetch pool {pair_addr}: {e}", endpoint=pair_addr
            ) from e

    raise NetworkError(
        f"Failed to fetch pool {pair_addr} after {max_retries} retries: {last_error}",
        endpoint=pair_addr,
    ) from last_error


def _require_fee_bps(fee_bps: int) -> int:
    if isinstance(fee_bps, bool) or not isinstance(fee_bps, int):
        raise ValidationError(f"fee_bps must be an int: {fee_bps!r}", {"fee_bps": fee_bps})
    if not 0 <= fee_bps < FEE_DENOMINATOR:
        raise ValidationError(
            f"fee_bps must be in [0, {FEE_DENOMINATOR}): {fee_bps}", {"fee_bps": fee_bps}
        )
    return fee_bps


def _clamp_reserve_out(new_reserve_out: int, reserve_out: int) -> int:
    # A drained or inconsistent reserve is pinned to 1 so later swaps stay defined
    if new_reserve_out < 1 or new_reserve_out > reserve_out:
        return 1
    return new_reserve_out


def _clamp_reserve_in(new_reserve_in: int) -> int:
    if new_reserve_in > MAX_INT256:
        return MAX_INT256
    return new_reserve_in


def swap_exact_in(
    amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int = DEFAULT_FEE_BPS
) -> SwapResult:
    """
    Simulate selling exactly ``amount_in`` into the pool.

    Formula (integer, floor division):
        amountInWithFee = amountIn * (10000 - fee_bps)
        amountOut = amountInWithFee * reserveOut / (amountInWithFee + reserveIn * 10000)

    With the default 30 bps this is the pair contract's 997/1000 rule.

    Args:
        amount_in: Input amount in base units
        reserve_in: Reserve of the input asset
        reserve_out: Reserve of the output asset
        fee_bps: Pool fee in basis points

    Returns:
        SwapResult with ``amount_out`` and the post-swap reserves

    Raises:
        ValidationError: If an amount is negative, a reserve is not positive
            or the fee is out of range
    """
    require_amount("amount_in", amount_in)
    require_reserve("reserve_in", reserve_in)
    require_reserve("reserve_out", reserve_out)
    _require_fee_bps(fee_bps)

    amount_in_with_fee = amount_in * (FEE_DENOMINATOR - fee_bps)
    numerator = amount_in_with_fee * reserve_out
    denominator = amount_in_with_fee + reserve_in * FEE_DENOMINATOR
    amount_out = numerator // denominator

    return SwapResult(
        new_reserve_in=_clamp_reserve_in(reserve_in + amount_in),
        new_reserve_out=_clamp_reserve_out(reserve_out - amount_out, reserve_out),
        amount_out=amount_out,
    )


def swap_exact_out(
    amount_out: int, reserve_in: int, reserve_out: int, fee_bps: int = DEFAULT_FEE_BPS
) -> SwapResult:
    """
    Simulate buying exactly ``amount_out`` from the pool.

    Formula (integer):
        amountIn = reserveIn * amountOut * 10000 / ((reserveOut - amountOut) * (10000 - fee_bps)) + 1

    The trailing +1 rounds in the pool's favour, so the payer always supplies
    at least the exact required input. Requests at or beyond the output
    reserve are priced against a reserve of 1 instead of failing.

    Args:
        amount_out: Desired output amount in base units
        reserve_in: Reserve of the input asset
        reserve_out: Reserve of the output asset
        fee_bps: Pool fee in basis points

    Returns:
        SwapResult with ``amount_in`` and the post-swap reserves
    """
    require_amount("amount_out", amount_out)
    require_reserve("reserve_in", reserve_in)
    require_reserve("reserve_out", reserve_out)
    _require_fee_bps(fee_bps)

    new_reserve_out = _clamp_reserve_out(reserve_out - amount_out, reserve_out)

    numerator = reserve_in * amount_out * FEE_DENOMINATOR
    denominator = new_reserve_out * (FEE_DENOMINATOR - fee_bps)
    amount_in = numerator // denominator + 1

    return SwapResult(
        new_reserve_in=_clamp_reserve_in(reserve_in + amount_in),
        new_reserve_out=new_reserve_out,
        amount_in=amount_in,
    )
