"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

import math
from datetime import date, datetime
from typing import Any

from neuroquant.core.exceptions.backtest import InvalidConfigError, ValidationError


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a numeric value is positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        InvalidConfigError: If value is not a finite positive number
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidConfigError(param_name, value, "must be a number")
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfigError(param_name, value, "must be positive")
    return value


def validate_positive_int(value: int, param_name: str) -> int:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated integer

    Raises:
        InvalidConfigError: If value is not an integer >= 1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(param_name, value, "must be an integer")
    if value < 1:
        raise InvalidConfigError(param_name, value, "must be a positive integer")
    return value


def validate_percentage(value: float, param_name: str = "percentage") -> float:
    """Validate that a value is a valid percentage (0-100 inclusive).

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated percentage

    Raises:
        InvalidConfigError: If value is not between 0 and 100
    """
    if isinstance(value, bool) or not isinstance(value, int | float) or math.isnan(value):
        raise InvalidConfigError(param_name, value, "must be a number")
    if value < 0 or value > 100:
        raise InvalidConfigError(param_name, value, "must be between 0 and 100")
    return value


def parse_calendar_day(value: Any) -> date:
    """Normalise a date-like value to a calendar day.

    Accepts ``date``, ``datetime`` (the time part is dropped) and ISO strings,
    including full timestamps such as ``2024-05-01T00:00:00Z``.

    Raises:
        ValidationError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError as e:
            raise ValidationError(f"Unparseable date: {value!r}") from e
    raise ValidationError(f"Unparseable date: {value!r}")
