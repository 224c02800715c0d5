"""
Custom exception hierarchy for the backtesting platform.

This module defines domain-specific exceptions for better error handling.
"""


class BacktestException(Exception):
    """Base exception for all backtesting-related errors."""

    pass


class ValidationError(BacktestException):
    """Raised when input validation fails."""

    pass


class InvalidInputError(ValidationError):
    """Raised when the price series or signal input cannot be backtested."""

    pass


class InvalidConfigError(ValidationError):
    """Raised when a strategy configuration violates its constraints."""

    def __init__(self, field: str, value: object, constraint: str):
        self.field = field
        self.value = value
        self.constraint = constraint
        super().__init__(f"Invalid {field}={value!r}: {constraint}")


class DataError(BacktestException):
    """Raised when data access or processing fails."""

    pass


class MarketDataError(DataError):
    """Raised when an exchange cannot deliver a usable OHLCV series."""

    def __init__(self, exchange: str, symbol: str, reason: str):
        self.exchange = exchange
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"{exchange} market data failed for {symbol}: {reason}")


class SignalProviderError(BacktestException):
    """Raised when an AI signal provider call fails."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider} signal provider failed: {reason}")


class CalculationError(BacktestException):
    """Raised when mathematical calculations fail."""

    pass
