"""
Core data types for sandwich simulation.

Every value is built fresh for one query and never mutated afterwards, so
the dataclasses are frozen and safe to share between threads.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PoolState:
    """
    Reserves of a constant-product pool right before a swap.

    Attributes:
        reserve_in: Reserve of the asset being sold into the pool
        reserve_out: Reserve of the asset being bought from the pool
    """

    reserve_in: int
    reserve_out: int


@dataclass(frozen=True)
class SwapResult:
    """
    Result of one simulated swap against a PoolState.

    Exactly one of ``amount_in`` / ``amount_out`` is set: exact-in queries
    fill ``amount_out``, exact-out queries fill ``amount_in``.

    Attributes:
        new_reserve_in: Reserve of the input asset after the swap
        new_reserve_out: Reserve of the output asset after the swap
        amount_in: Input required for an exact-out query
        amount_out: Output received for an exact-in query
    """

    new_reserve_in: int
    new_reserve_out: int
    amount_in: Optional[int] = None
    amount_out: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting the unset amount."""
        data = {
            "new_reserve_in": self.new_reserve_in,
            "new_reserve_out": self.new_reserve_out,
        }
        if self.amount_in is not None:
            data["amount_in"] = self.amount_in
        if self.amount_out is not None:
            data["amount_out"] = self.amount_out
        return data


@dataclass(frozen=True)
class SandwichQuery:
    """A pending victim trade plus the pool reserves it will execute against."""

    user_amount_in: int
    user_min_recv: int
    reserve_in: int
    reserve_out: int

    @property
    def pool(self) -> PoolState:
        return PoolState(self.reserve_in, self.reserve_out)


@dataclass(frozen=True)
class SandwichPlan:
    """Frontrun size chosen by the search."""

    optimal_attacker_in: int


@dataclass(frozen=True)
class SandwichOutcome:
    """
    Full trace of a valid frontrun -> victim -> backrun sequence.

    Attributes:
        revenue: Backrun proceeds minus frontrun input, in base units of the
            input asset. Negative values are losses.
        attacker_in: Frontrun input amount
        user_amount_in: Victim input amount
        user_min_recv: Victim minimum acceptable output
        reserve_state: Pool reserves before the frontrun
        frontrun: Attacker buy
        victim: Victim trade
        backrun: Attacker sell, priced on post-victim reserves
    """

    revenue: int
    attacker_in: int
    user_amount_in: int
    user_min_recv: int
    reserve_state: PoolState
    frontrun: SwapResult
    victim: SwapResult
    backrun: SwapResult

    @property
    def is_profitable(self) -> bool:
        return self.revenue > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (ints left as ints)."""
        return {
            "revenue": self.revenue,
            "attacker_in": self.attacker_in,
            "user_amount_in": self.user_amount_in,
            "user_min_recv": self.user_min_recv,
            "reserve_state": {
                "reserve_in": self.reserve_state.reserve_in,
                "reserve_out": self.reserve_state.reserve_out,
            },
            "frontrun": self.frontrun.to_dict(),
            "victim": self.victim.to_dict(),
            "backrun": self.backrun.to_dict(),
        }

    def format_log(self) -> str:
        """Format a one-line summary for logging."""
        return (
            f"Revenue {self.revenue} "
            f"(frontrun {self.attacker_in} -> {self.frontrun.amount_out}, "
            f"victim {self.user_amount_in} -> {self.victim.amount_out} "
            f"min {self.user_min_recv}, "
            f"backrun {self.frontrun.amount_out} -> {self.backrun.amount_out})"
        )
