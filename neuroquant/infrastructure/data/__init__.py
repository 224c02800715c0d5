"""
Data processing infrastructure.

This module provides indicator calculation and validation for daily
OHLCV series.
"""

from .ohlcv_validator import OHLCVValidator
from .technical_indicators import (
    IndicatorSet,
    TechnicalIndicatorsCalculator,
    compute_rsi,
    compute_sma,
)

__all__ = [
    "OHLCVValidator",
    "IndicatorSet",
    "TechnicalIndicatorsCalculator",
    "compute_sma",
    "compute_rsi",
]
