"""
DEX adapter modules for different AMM types.
"""

from .v2 import fetch_pool, swap_exact_in, swap_exact_out

__all__ = ["fetch_pool", "swap_exact_in", "swap_exact_out"]
