"""
Strategy mode enumerations.

This module defines where a backtest takes its trading decisions from.
"""

from enum import StrEnum


class StrategyMode(StrEnum):
    """
    Allowed strategy modes.

    ALGO derives decisions from moving-average crossovers and RSI;
    AI replays an externally supplied, date-keyed signal list.
    """

    ALGO = "ALGO"
    AI = "AI"

    @property
    def uses_external_signals(self) -> bool:
        """Check if the mode consumes external signals."""
        return self == self.AI

    @property
    def has_warmup(self) -> bool:
        """Check if the mode waits for indicators to warm up."""
        return self == self.ALGO
