"""
Bisection search over a monotonic integer objective.

Caller obligation: ``calculate`` must be monotonic over ``[low, high]`` and
``passes`` must hold at ``low`` and fail at ``high`` (or the other way round,
matching the direction of monotonicity). This is not checked, since doing so
would mean evaluating the objective everywhere; a bracket that breaks it
still terminates, but the returned value is meaningless.
"""

import logging
from typing import Callable, Tuple

from .numeric import WAD

logger = logging.getLogger(__name__)

# 1% of the bracket midpoint, as a WAD fraction
DEFAULT_TOLERANCE = WAD // 100


def search_bracket(
    low: int,
    high: int,
    calculate: Callable[[int], int],
    passes: Callable[[int], bool],
    tolerance: int = DEFAULT_TOLERANCE,
) -> Tuple[int, int]:
    """
    Narrow ``[low, high]`` until it is within ``tolerance`` of its midpoint.

    Each step evaluates ``calculate`` at the midpoint; when ``passes`` accepts
    the result the answer lies in the upper half, otherwise in the lower half.
    The loop stops once ``high - low <= tolerance * mid / WAD`` or the bracket
    can no longer be split.

    Args:
        low: Lower bound, inclusive
        high: Upper bound
        calculate: Objective evaluated at candidate points
        passes: Acceptance test applied to the objective's output
        tolerance: Relative width at which to stop, as a WAD fraction
            (10**16 == 1%)

    Returns:
        The final (low, high) bracket. ``low`` has passed (or is the
        untouched starting bound); ``high`` has failed (or is the untouched
        starting bound).
    """
    steps = 0
    while high - low > tolerance * ((high + low) // 2) // WAD and high - low > 1:
        mid = (high + low) // 2
        if passes(calculate(mid)):
            low = mid
        else:
            high = mid
        steps += 1

    logger.debug(f"Bisection converged after {steps} steps: [{low}, {high}]")
    return low, high


def binary_search(
    low: int,
    high: int,
    calculate: Callable[[int], int],
    passes: Callable[[int], bool],
    tolerance: int = DEFAULT_TOLERANCE,
) -> int:
    """
    Find the boundary where ``passes(calculate(x))`` flips, within tolerance.

    Returns the midpoint of the converged bracket, floored at zero.
    """
    low, high = search_bracket(low, high, calculate, passes, tolerance)
    result = (high + low) // 2
    if result < 0:
        return 0
    return result
