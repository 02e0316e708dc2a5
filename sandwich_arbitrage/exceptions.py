"""
Exception hierarchy for the sandwich arbitrage calculator.

Provides specific exception types for different error categories to enable
better error handling and debugging. An unprofitable or constraint-violating
sandwich is never an exception; the evaluator returns None for it.
"""

from typing import Optional, Dict, Any


class SandwichArbitrageError(Exception):
    """Base exception for all sandwich arbitrage related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(SandwichArbitrageError):
    """Raised when there are configuration-related issues."""

    pass


class ValidationError(SandwichArbitrageError, ValueError):
    """Raised when an amount, reserve or fee fails input validation."""

    pass


class DataError(SandwichArbitrageError):
    """Raised when on-chain data does not have the expected shape."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        symbol: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.source = source
        self.symbol = symbol


class NetworkError(SandwichArbitrageError):
    """Raised when network or connectivity issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code
