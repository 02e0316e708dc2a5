"""Tests for next-block base fee prediction."""

import random

import pytest

from dex.base_fee import JITTER_RANGE, calc_next_block_base_fee, predict_from_block
from sandwich_arbitrage.exceptions import DataError, ValidationError

GWEI = 10**9


def test_full_block_raises_fee_by_an_eighth():
    assert calc_next_block_base_fee(100 * GWEI, 30_000_000, 30_000_000) == 112_500_000_000


def test_empty_block_lowers_fee_by_an_eighth():
    assert calc_next_block_base_fee(100 * GWEI, 0, 30_000_000) == 87_500_000_000


def test_block_at_target_keeps_fee():
    assert calc_next_block_base_fee(100 * GWEI, 15_000_000, 30_000_000) == 100 * GWEI


def test_negative_adjustment_truncates_toward_zero():
    """-7 / 8 is 0 on-chain, not -1."""
    assert calc_next_block_base_fee(7, 0, 2) == 7


def test_jitter_only_with_rng():
    base = calc_next_block_base_fee(100 * GWEI, 20_000_000, 30_000_000)
    jittered = calc_next_block_base_fee(100 * GWEI, 20_000_000, 30_000_000, random.Random(7))

    assert base <= jittered < base + JITTER_RANGE


def test_jitter_reproducible_with_seed():
    first = calc_next_block_base_fee(100 * GWEI, 0, 30_000_000, random.Random(42))
    second = calc_next_block_base_fee(100 * GWEI, 0, 30_000_000, random.Random(42))
    assert first == second


@pytest.mark.parametrize("gas_limit", [0, 1])
def test_gas_limit_without_target_rejected(gas_limit):
    with pytest.raises(ValidationError, match="gas_limit"):
        calc_next_block_base_fee(100 * GWEI, 0, gas_limit)


def test_negative_inputs_rejected():
    with pytest.raises(ValidationError):
        calc_next_block_base_fee(-1, 0, 30_000_000)


def test_predict_from_block():
    block = {"baseFeePerGas": 100 * GWEI, "gasUsed": 30_000_000, "gasLimit": 30_000_000}
    assert predict_from_block(block) == 112_500_000_000


def test_predict_from_pre_london_block():
    with pytest.raises(DataError) as exc_info:
        predict_from_block({"gasUsed": 1, "gasLimit": 2})

    assert exc_info.value.source == "block"
    assert exc_info.value.details == {"field": "baseFeePerGas"}
