"""
External trading signal model.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from neuroquant.core.enums import SignalType
from neuroquant.core.exceptions.backtest import ValidationError


@dataclass(frozen=True)
class ExternalSignal:
    """A dated BUY/SELL decision supplied by a signal provider."""

    date: date
    action: SignalType
    reason: str = ""
    confidence: float | None = None
    strategy_source: str | None = None

    def __post_init__(self) -> None:
        """Validate signal data after initialization."""
        if self.action not in (SignalType.BUY, SignalType.SELL):
            raise ValidationError(f"Signal action must be BUY or SELL, got {self.action}")
        if self.confidence is not None and not 0 <= self.confidence <= 100:
            raise ValidationError(f"Confidence must be between 0 and 100, got {self.confidence}")

    def to_dict(self) -> dict[str, Any]:
        """Convert signal to dictionary."""
        return {
            "date": self.date.isoformat(),
            "action": self.action.value,
            "reason": self.reason,
            "confidence": self.confidence,
            "strategySource": self.strategy_source,
        }
