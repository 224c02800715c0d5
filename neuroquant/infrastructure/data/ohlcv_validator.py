"""
OHLCV data validation module.

Checks daily series coming from exchanges before they reach the engine:
structure, data types, value ranges and OHLC relationships.
"""

import pandas as pd
from loguru import logger

from neuroquant.core.exceptions.backtest import ValidationError
from neuroquant.core.models.market import OHLCV_COLUMNS


class OHLCVValidator:
    """
    Daily OHLCV validator.

    Features:
    - Data structure validation (required columns, duplicate dates)
    - Data type validation for numeric columns
    - Value range validation (non-negative prices and volume)
    - OHLC relationship validation
    - Data quality checks with warnings
    """

    def validate_data(self, data: pd.DataFrame) -> bool:
        """
        Validate OHLCV data integrity.

        Args:
            data: DataFrame with date/open/high/low/close/volume columns

        Returns:
            True if data is valid

        Raises:
            ValidationError: If data has integrity issues
        """
        if data.empty:
            raise ValidationError("No bars in series")

        self._validate_data_structure(data)
        self._validate_data_types(data)
        self._validate_data_values(data)
        self._validate_ohlc_relationships(data)
        self._validate_data_quality(data)

        return True

    def _validate_data_structure(self, data: pd.DataFrame) -> None:
        """Validate basic data structure requirements."""
        missing_columns = set(OHLCV_COLUMNS) - set(data.columns)
        if missing_columns:
            raise ValidationError(f"Missing required columns: {sorted(missing_columns)}")

        if data["date"].duplicated().any():
            raise ValidationError("Duplicate dates found in data")

        if not data["date"].is_monotonic_increasing:
            raise ValidationError("Dates are not in ascending order")

    def _validate_data_types(self, data: pd.DataFrame) -> None:
        """Validate data types for numeric columns."""
        for col in OHLCV_COLUMNS[1:]:
            if not pd.api.types.is_numeric_dtype(data[col]):
                raise ValidationError(f"Column {col} must be numeric")

        for col in OHLCV_COLUMNS:
            if data[col].isna().any():
                raise ValidationError(f"Column {col} contains NaN values")

    def _validate_data_values(self, data: pd.DataFrame) -> None:
        """Validate value ranges for prices and volume."""
        for col in ["open", "high", "low", "close", "volume"]:
            if (data[col] < 0).any():
                raise ValidationError(f"Column {col} contains negative values")

    def _validate_ohlc_relationships(self, data: pd.DataFrame) -> None:
        """Validate OHLC price relationships."""
        invalid_ohlc = (
            (data["high"] < data["low"])
            | (data["high"] < data["open"])
            | (data["high"] < data["close"])
            | (data["low"] > data["open"])
            | (data["low"] > data["close"])
        )

        if invalid_ohlc.any():
            invalid_count = invalid_ohlc.sum()
            raise ValidationError(f"Invalid OHLC relationships found in {invalid_count} rows")

    def _validate_data_quality(self, data: pd.DataFrame) -> None:
        """Validate data quality and provide warnings for anomalies."""
        lows = data["low"].where(data["low"] > 0)
        daily_range = (data["high"] - data["low"]) / lows
        extreme_moves = daily_range > 0.5  # More than 50% daily range

        if extreme_moves.any():
            extreme_count = extreme_moves.sum()
            logger.warning(f"Found {extreme_count} days with extreme price movements (>50%)")