"""Tests for the exceptions module."""

import pytest

from sandwich_arbitrage import (
    SandwichArbitrageError,
    ConfigurationError,
    ValidationError,
    DataError,
    NetworkError,
)


def test_base_exception():
    """Test the base exception class."""
    error = SandwichArbitrageError("Test error")
    assert str(error) == "Test error"
    assert error.details == {}

    error_with_details = SandwichArbitrageError("Test error", {"key": "value"})
    assert error_with_details.details == {"key": "value"}


def test_configuration_error():
    """Test configuration error."""
    error = ConfigurationError("Config error", {"config_file": "test.yaml"})
    assert str(error) == "Config error"
    assert error.details["config_file"] == "test.yaml"
    assert isinstance(error, SandwichArbitrageError)


def test_validation_error():
    """Validation errors are also ValueErrors."""
    error = ValidationError("reserve_in must be positive: 0", {"reserve_in": 0})
    assert str(error) == "reserve_in must be positive: 0"
    assert error.details == {"reserve_in": 0}
    assert isinstance(error, SandwichArbitrageError)
    assert isinstance(error, ValueError)


def test_data_error():
    """Test data error."""
    error = DataError("Missing field", source="block", details={"field": "gasUsed"})
    assert str(error) == "Missing field"
    assert error.source == "block"
    assert error.symbol is None
    assert error.details == {"field": "gasUsed"}
    assert isinstance(error, SandwichArbitrageError)


def test_network_error():
    """Test network error."""
    error = NetworkError("Connection failed", endpoint="https://rpc.example", status_code=429)
    assert str(error) == "Connection failed"
    assert error.endpoint == "https://rpc.example"
    assert error.status_code == 429
    assert isinstance(error, SandwichArbitrageError)


def test_exception_hierarchy():
    """All errors can be caught through the base class."""
    exceptions = [
        ConfigurationError("test"),
        ValidationError("test"),
        DataError("test"),
        NetworkError("test"),
    ]

    for exc in exceptions:
        with pytest.raises(SandwichArbitrageError):
            raise exc
