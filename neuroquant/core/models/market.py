"""
Market data domain models.

A series is an ordered sequence of daily PricePoint bars. Helpers convert it
to and from the pandas frame layout used by the indicator library.
"""

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

import pandas as pd

from neuroquant.core.exceptions.backtest import InvalidInputError
from neuroquant.core.utils.validation import parse_calendar_day

OHLCV_COLUMNS = ["date", "open", "high", "low", "close", "volume"]


@dataclass(frozen=True)
class PricePoint:
    """One daily OHLCV bar."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PricePoint":
        """Build a bar from a mapping with OHLCV keys and an ISO date."""
        return cls(
            date=parse_calendar_day(data["date"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=float(data["volume"]),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert bar to dictionary with an ISO date."""
        result = asdict(self)
        result["date"] = self.date.isoformat()
        return result


def series_to_frame(series: Sequence[PricePoint] | pd.DataFrame) -> pd.DataFrame:
    """
    Convert a series to an OHLCV DataFrame with a positional index.

    Args:
        series: Chronological price bars

    Returns:
        DataFrame with columns date, open, high, low, close, volume
    """
    if isinstance(series, pd.DataFrame):
        return series.reset_index(drop=True)

    return pd.DataFrame(
        [
            (point.date, point.open, point.high, point.low, point.close, point.volume)
            for point in series
        ],
        columns=OHLCV_COLUMNS,
    )


def frame_to_series(data: pd.DataFrame) -> list[PricePoint]:
    """
    Convert an OHLCV DataFrame back to PricePoint bars.

    Args:
        data: DataFrame holding at least the OHLCV columns

    Returns:
        List of PricePoint in row order

    Raises:
        InvalidInputError: If required columns are missing
    """
    missing_columns = set(OHLCV_COLUMNS) - set(data.columns)
    if missing_columns:
        raise InvalidInputError(f"Missing required columns: {sorted(missing_columns)}")

    return [PricePoint.from_dict(row) for row in data[OHLCV_COLUMNS].to_dict("records")]


def close_prices(series: Sequence[PricePoint] | pd.DataFrame) -> pd.Series:
    """Extract closing prices as a float Series indexed by position."""
    if isinstance(series, pd.DataFrame):
        if "close" not in series.columns:
            raise InvalidInputError("Missing required column: close")
        return series["close"].astype(float).reset_index(drop=True)
    return pd.Series([point.close for point in series], dtype=float)
