"""
Next-block base fee prediction (EIP-1559).

Used by callers that weigh a sandwich's revenue against the gas of three
extra transactions. The optional jitter of 0-9 wei makes otherwise identical
transactions hash differently; it comes from a caller-supplied random source
so the default prediction is deterministic.
"""

import random
from typing import Any, Mapping, Optional

from sandwich_arbitrage.exceptions import DataError, ValidationError

from .numeric import div_trunc, require_amount

# EIP-1559 caps the per-block change at 1/8
BASE_FEE_MAX_CHANGE_DENOMINATOR = 8
JITTER_RANGE = 10


def calc_next_block_base_fee(
    base_fee: int,
    gas_used: int,
    gas_limit: int,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Calculate the base fee for the next block from the current block's usage.

    Formula:
        target = gas_limit / 2
        next = base_fee + base_fee * (gas_used - target) / target / 8

    Divisions truncate toward zero, as they do on-chain.

    Args:
        base_fee: Current block base fee in wei
        gas_used: Gas used by the current block
        gas_limit: Gas limit of the current block
        rng: Random source for a 0-9 wei jitter; no jitter when omitted

    Returns:
        Predicted base fee in wei
    """
    require_amount("base_fee", base_fee)
    require_amount("gas_used", gas_used)
    require_amount("gas_limit", gas_limit)

    target_gas_used = gas_limit // 2
    if target_gas_used == 0:
        raise ValidationError(
            f"gas_limit too small to have a gas target: {gas_limit}",
            {"gas_limit": gas_limit},
        )

    delta = gas_used - target_gas_used
    adjustment = div_trunc(
        div_trunc(base_fee * delta, target_gas_used), BASE_FEE_MAX_CHANGE_DENOMINATOR
    )
    new_base_fee = base_fee + adjustment

    if rng is not None:
        new_base_fee += rng.randrange(JITTER_RANGE)

    return new_base_fee


def predict_from_block(
    block: Mapping[str, Any], rng: Optional[random.Random] = None
) -> int:
    """
    Predict the next base fee from a block as returned by ``eth_getBlockByNumber``.

    Raises:
        DataError: If the block predates EIP-1559 or lacks gas fields
    """
    try:
        base_fee = block["baseFeePerGas"]
        gas_used = block["gasUsed"]
        gas_limit = block["gasLimit"]
    except KeyError as e:
        raise DataError(
            f"Block is missing {e.args[0]}", source="block", details={"field": e.args[0]}
        ) from e

    return calc_next_block_base_fee(int(base_fee), int(gas_used), int(gas_limit), rng)
