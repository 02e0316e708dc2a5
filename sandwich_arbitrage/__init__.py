"""
Sandwich Arbitrage Calculator.

Exact-integer simulation of frontrun / victim / backrun sequences against
constant-product pools, with a bisection search for the frontrun size that
pushes the victim to their minimum output. The pool math and evaluator live
in the ``dex`` package; this package holds configuration, errors and shared
helpers.
"""

PROJECT_NAME = "Sandwich-Arbitrage-Calculator"
__version__ = "0.3.0"
VERSION = __version__

from sandwich_arbitrage.exceptions import (
    SandwichArbitrageError,
    ConfigurationError,
    ValidationError,
    DataError,
    NetworkError,
)

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "SandwichArbitrageError",
    "ConfigurationError",
    "ValidationError",
    "DataError",
    "NetworkError",
]
