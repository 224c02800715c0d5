"""
Technical Indicators Calculator.

This module provides the simple moving average and Wilder's RSI used by the
crossover strategy. Implements the Strategy Pattern so indicator columns can
be attached to an OHLCV DataFrame in one pass.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import numpy as np
import pandas as pd
from loguru import logger

from neuroquant.core.exceptions.backtest import CalculationError, InvalidConfigError
from neuroquant.core.models.market import PricePoint, close_prices
from neuroquant.core.utils.validation import validate_positive_int

PriceInput = Sequence[PricePoint] | pd.DataFrame


def compute_sma(series: PriceInput, window: int) -> pd.Series:
    """
    Simple moving average of closing prices.

    Args:
        series: Price bars or an OHLCV DataFrame
        window: Number of trailing bars to average

    Returns:
        Series aligned with the input; NaN until ``window`` bars are available.
        A window longer than the series yields all NaN.

    Raises:
        InvalidConfigError: If window is not a positive integer
    """
    validate_positive_int(window, "window")
    closes = close_prices(series)
    return closes.rolling(window=window, min_periods=window).mean()


def compute_rsi(series: PriceInput, period: int) -> pd.Series:
    """
    Relative Strength Index with Wilder smoothing.

    The first ``period`` deltas seed the average gain/loss with a simple mean;
    later bars use ``avg = (avg * (period - 1) + x) / period``. An average loss
    of zero is replaced by one, so a series that only rises saturates at a
    finite value instead of dividing by zero.

    Args:
        series: Price bars or an OHLCV DataFrame
        period: Smoothing period

    Returns:
        Series aligned with the input; NaN for indices below ``period`` and
        entirely NaN when the series has ``period`` bars or fewer.

    Raises:
        InvalidConfigError: If period is not a positive integer
    """
    validate_positive_int(period, "period")
    closes = close_prices(series).to_numpy(dtype=float)
    rsi = np.full(len(closes), np.nan)
    if len(closes) <= period:
        return pd.Series(rsi, dtype=float)

    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = gains[:period].sum() / period
    avg_loss = losses[:period].sum() / period
    rsi[period] = _rsi_value(avg_gain, avg_loss)

    for i in range(period + 1, len(closes)):
        avg_gain = (avg_gain * (period - 1) + gains[i - 1]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i - 1]) / period
        rsi[i] = _rsi_value(avg_gain, avg_loss)

    return pd.Series(rsi, dtype=float)


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    rs = avg_gain / (avg_loss if avg_loss != 0 else 1.0)
    return 100.0 - (100.0 / (1.0 + rs))


@dataclass(frozen=True)
class IndicatorSet:
    """Indicator sequences a backtest run reads, all aligned with the series."""

    short_sma: pd.Series
    long_sma: pd.Series
    rsi: pd.Series

    @classmethod
    def compute(
        cls, series: PriceInput, short_window: int, long_window: int, rsi_period: int
    ) -> "IndicatorSet":
        """Compute both moving averages and the RSI for a series."""
        return cls(
            short_sma=compute_sma(series, short_window),
            long_sma=compute_sma(series, long_window),
            rsi=compute_rsi(series, rsi_period),
        )

    def __len__(self) -> int:
        return len(self.short_sma)


class IndicatorStrategy(Protocol):
    """Protocol for technical indicator calculation strategies."""

    def calculate(self, data: pd.DataFrame) -> pd.DataFrame:
        """Calculate specific indicator for the given data."""
        ...


class MovingAverageStrategy:
    """Strategy for calculating a simple moving average column."""

    def __init__(self, window: int, column: str | None = None):
        """Initialize with the averaging window and an optional column name."""
        self.window = window
        self.column = column or f"sma_{window}"

    def calculate(self, data: pd.DataFrame) -> pd.DataFrame:
        """Add the SMA column."""
        result = data.copy()
        result[self.column] = compute_sma(result, self.window).to_numpy()
        return result


class RSIStrategy:
    """Strategy for calculating RSI (Relative Strength Index) indicator."""

    def __init__(self, period: int = 14, column: str = "rsi"):
        """Initialize RSI strategy with configurable period."""
        self.period = period
        self.column = column

    def calculate(self, data: pd.DataFrame) -> pd.DataFrame:
        """Add RSI indicator."""
        result = data.copy()
        result[self.column] = compute_rsi(result, self.period).to_numpy()
        return result


class TechnicalIndicatorsCalculator:
    """
    Technical indicators calculator using Strategy Pattern.

    This class orchestrates different indicator calculation strategies
    and provides a clean interface for adding indicators to OHLCV data.
    """

    def __init__(self, strategies: dict[str, IndicatorStrategy] | None = None) -> None:
        """Initialize calculator with the given or default strategies."""
        if strategies is None:
            strategies = {
                "short_sma": MovingAverageStrategy(10, "short_sma"),
                "long_sma": MovingAverageStrategy(50, "long_sma"),
                "rsi": RSIStrategy(14),
            }
        self._strategies: dict[str, IndicatorStrategy] = dict(strategies)

    def add_strategy(self, name: str, strategy: IndicatorStrategy) -> None:
        """Add a new indicator calculation strategy."""
        self._strategies[name] = strategy

    def remove_strategy(self, name: str) -> None:
        """Remove an indicator calculation strategy."""
        self._strategies.pop(name, None)

    def calculate_all_indicators(self, data: pd.DataFrame) -> pd.DataFrame:
        """
        Calculate all configured technical indicators.

        Args:
            data: OHLCV DataFrame

        Returns:
            DataFrame with additional indicator columns

        Raises:
            InvalidConfigError: If a strategy was configured with a bad window
            CalculationError: If an indicator cannot be computed
        """
        if data.empty:
            return data

        result = data.copy()
        for name, strategy in self._strategies.items():
            logger.debug(f"Calculating {name} indicator")
            try:
                result = strategy.calculate(result)
            except InvalidConfigError:
                raise
            except (ValueError, TypeError, KeyError) as e:
                logger.error(f"Failed to calculate {name} indicator: {e}")
                raise CalculationError(f"Technical indicator calculation failed for {name}") from e

        logger.info(f"Calculated {len(self._strategies)} indicators for {len(result)} rows")
        return result

    def get_available_indicators(self) -> list[str]:
        """Get list of available indicator strategies."""
        return list(self._strategies.keys())


def create_technical_indicators_calculator(
    short_window: int, long_window: int, rsi_period: int
) -> TechnicalIndicatorsCalculator:
    """Factory function to create a calculator for a crossover strategy's windows."""
    return TechnicalIndicatorsCalculator(
        {
            "short_sma": MovingAverageStrategy(short_window, "short_sma"),
            "long_sma": MovingAverageStrategy(long_window, "long_sma"),
            "rsi": RSIStrategy(rsi_period),
        }
    )
