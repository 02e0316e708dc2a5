"""
Sandwich evaluator: sizes and simulates a frontrun -> victim -> backrun sequence.

The attacker buys first, pushing the price against the victim, lets the
victim trade, then sells back everything bought in the first leg. The best
frontrun is the largest one that still leaves the victim at or above their
minimum output; past that point the victim's transaction reverts and there
is nothing to sandwich.
"""

import logging
from typing import Optional

from sandwich_arbitrage.config_loader import RuntimeConfig

from .adapters.v2 import DEFAULT_FEE_BPS, swap_exact_in
from .numeric import WAD, require_amount, require_reserve
from .search import DEFAULT_TOLERANCE, search_bracket
from .types import PoolState, SandwichOutcome, SandwichPlan, SandwichQuery

logger = logging.getLogger(__name__)

# Frontrun search range, in wei of the input asset
DEFAULT_LOWER_BOUND = 0
DEFAULT_UPPER_BOUND = 100 * WAD


def _validate_query(
    user_amount_in: int, user_min_recv: int, reserve_in: int, reserve_out: int
) -> None:
    require_amount("user_amount_in", user_amount_in)
    require_amount("user_min_recv", user_min_recv)
    require_reserve("reserve_in", reserve_in)
    require_reserve("reserve_out", reserve_out)


def find_optimal_frontrun_in(
    user_amount_in: int,
    user_min_recv: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
    lower_bound: int = DEFAULT_LOWER_BOUND,
    upper_bound: int = DEFAULT_UPPER_BOUND,
    tolerance: int = DEFAULT_TOLERANCE,
) -> int:
    """
    Calculate the frontrun input that squeezes the victim down to their floor.

    Searches ``[lower_bound, upper_bound]`` for the largest attacker input
    after which the victim still receives at least ``user_min_recv``.

    Args:
        user_amount_in: Victim's input amount
        user_min_recv: Victim's minimum acceptable output
        reserve_in: Pool reserve of the asset both parties sell
        reserve_out: Pool reserve of the asset both parties buy
        fee_bps: Pool fee in basis points
        lower_bound: Smallest frontrun considered
        upper_bound: Largest frontrun considered
        tolerance: Relative search tolerance as a WAD fraction

    Returns:
        Frontrun input amount. When the bracket midpoint would push the victim
        below their floor, the last passing lower edge is returned instead, so
        the result is always executable whenever ``lower_bound`` is.
    """
    _validate_query(user_amount_in, user_min_recv, reserve_in, reserve_out)

    def victim_out(attacker_in: int) -> int:
        frontrun = swap_exact_in(attacker_in, reserve_in, reserve_out, fee_bps)
        victim = swap_exact_in(
            user_amount_in, frontrun.new_reserve_in, frontrun.new_reserve_out, fee_bps
        )
        return victim.amount_out

    def passes(amount_out: int) -> bool:
        return amount_out >= user_min_recv

    low, high = search_bracket(lower_bound, upper_bound, victim_out, passes, tolerance)
    mid = max((high + low) // 2, 0)

    if passes(victim_out(mid)):
        optimal = mid
    else:
        optimal = low

    logger.debug(
        f"Optimal frontrun for victim {user_amount_in} (min {user_min_recv}) "
        f"on reserves {reserve_in}/{reserve_out}: {optimal}"
    )
    return optimal


def evaluate_sandwich(
    attacker_in: int,
    user_amount_in: int,
    user_min_recv: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
) -> Optional[SandwichOutcome]:
    """
    Simulate the three legs of a sandwich in order.

    The legs must run strictly in sequence: each one trades against the
    reserves left by the previous one. The backrun sells the frontrun's
    output back into the pool, so the reserve roles are swapped for it.

    Returns:
        SandwichOutcome with signed revenue, or None if the victim would
        receive less than ``user_min_recv`` (their transaction would revert)
    """
    require_amount("attacker_in", attacker_in)
    _validate_query(user_amount_in, user_min_recv, reserve_in, reserve_out)

    frontrun = swap_exact_in(attacker_in, reserve_in, reserve_out, fee_bps)
    victim = swap_exact_in(
        user_amount_in, frontrun.new_reserve_in, frontrun.new_reserve_out, fee_bps
    )
    backrun = swap_exact_in(
        frontrun.amount_out, victim.new_reserve_out, victim.new_reserve_in, fee_bps
    )

    if victim.amount_out < user_min_recv:
        logger.debug(
            f"Sandwich rejected: victim receives {victim.amount_out} "
            f"< min {user_min_recv} with frontrun {attacker_in}"
        )
        return None

    return SandwichOutcome(
        revenue=backrun.amount_out - attacker_in,
        attacker_in=attacker_in,
        user_amount_in=user_amount_in,
        user_min_recv=user_min_recv,
        reserve_state=PoolState(reserve_in, reserve_out),
        frontrun=frontrun,
        victim=victim,
        backrun=backrun,
    )


class SandwichCalculator:
    """Plans and evaluates sandwiches using fee and search settings from config."""

    def __init__(self, config: Optional[RuntimeConfig] = None):
        """Initialize calculator; defaults match a 0.3% pool and a 0-100 ETH search."""
        self.config = config or RuntimeConfig()

    def plan(self, query: SandwichQuery) -> SandwichPlan:
        """Find the frontrun size for a query."""
        search = self.config.search
        optimal = find_optimal_frontrun_in(
            query.user_amount_in,
            query.user_min_recv,
            query.reserve_in,
            query.reserve_out,
            fee_bps=self.config.fee_bps,
            lower_bound=search.lower_bound,
            upper_bound=search.upper_bound,
            tolerance=search.tolerance,
        )
        return SandwichPlan(optimal_attacker_in=optimal)

    def evaluate(
        self, query: SandwichQuery, plan: SandwichPlan
    ) -> Optional[SandwichOutcome]:
        """Simulate a plan against the query's reserves."""
        return evaluate_sandwich(
            plan.optimal_attacker_in,
            query.user_amount_in,
            query.user_min_recv,
            query.reserve_in,
            query.reserve_out,
            fee_bps=self.config.fee_bps,
        )

    def run(self, query: SandwichQuery) -> Optional[SandwichOutcome]:
        """Plan and evaluate in one call."""
        outcome = self.evaluate(query, self.plan(query))
        if outcome is None:
            logger.info("No valid sandwich: victim floor cannot be met")
        else:
            logger.info(f"Sandwich found: {outcome.format_log()}")
        return outcome
