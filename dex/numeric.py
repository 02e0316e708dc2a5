"""
Integer helpers shared by the pool model, the search and the fee predictor.

Amounts are Python ints in the token's smallest unit. Decimal is only used
at the edges, to turn human-entered strings like "0.01" into wei.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from sandwich_arbitrage.exceptions import ValidationError

# 1e18, the fixed-point unit for ether amounts and search tolerances
WAD = 10**18

# Largest value of a signed 256-bit word; reserves never grow past it
MAX_INT256 = 2**255 - 1


def div_trunc(numerator: int, denominator: int) -> int:
    """
    Integer division rounding toward zero.

    Matches EVM/big-number division for negative operands, where Python's
    ``//`` would round toward negative infinity.
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def parse_units(value: Union[str, int, Decimal], decimals: int = 18) -> int:
    """
    Convert a human-readable amount to integer base units.

    >>> parse_units("1.5")
    1500000000000000000
    >>> parse_units("0.01", 6)
    10000

    Raises:
        ValidationError: If the value is not a number or has more
            fractional digits than ``decimals`` allows
    """
    if isinstance(value, float):
        raise ValidationError(
            f"Refusing float amount {value!r}; pass a string", {"value": value}
        )
    try:
        with localcontext() as ctx:
            ctx.prec = 100
            scaled = Decimal(str(value)).scaleb(decimals)
    except InvalidOperation as e:
        raise ValidationError(f"Invalid amount: {value!r}", {"value": value}) from e

    if not scaled.is_finite() or scaled != scaled.to_integral_value():
        raise ValidationError(
            f"Amount {value} has more than {decimals} decimal places",
            {"value": str(value), "decimals": decimals},
        )
    return int(scaled)


def format_units(value: int, decimals: int = 18) -> str:
    """Convert integer base units to a plain decimal string ("1.5", "0", "-2")."""
    with localcontext() as ctx:
        ctx.prec = 100
        text = format(Decimal(value).scaleb(-decimals), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def require_amount(name: str, value: int) -> int:
    """Validate a non-negative integer amount (bools and floats are rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{name} must be an int, got {type(value).__name__}", {name: value}
        )
    if value < 0:
        raise ValidationError(f"{name} must be non-negative: {value}", {name: value})
    return value


def require_reserve(name: str, value: int) -> int:
    """Validate a strictly positive integer reserve."""
    require_amount(name, value)
    if value == 0:
        raise ValidationError(f"{name} must be positive: {value}", {name: value})
    return value
