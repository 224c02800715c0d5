"""
Trade domain model.
Optimized for high-performance backtesting with float operations.
"""

from dataclasses import dataclass
from datetime import date

from neuroquant.core.enums import SignalType
from neuroquant.core.exceptions.backtest import ValidationError


@dataclass(frozen=True)
class Trade:
    """Represents an executed trade."""

    date: date
    type: SignalType
    price: float
    amount: float
    balance_after: float
    reason: str

    def __post_init__(self) -> None:
        """Validate trade data after initialization."""
        if self.type not in (SignalType.BUY, SignalType.SELL):
            raise ValidationError(f"Trade type must be BUY or SELL, got {self.type}")
        if self.amount <= 0:
            raise ValidationError(f"Amount must be positive, got {self.amount}")
        if self.price < 0:
            raise ValidationError(f"Price must be non-negative, got {self.price}")
        if self.balance_after < 0:
            raise ValidationError(f"Balance must be non-negative, got {self.balance_after}")

    def notional_value(self) -> float:
        """Calculate the notional value of the trade."""
        return self.amount * self.price

    def to_dict(self) -> dict:
        """Convert trade to dictionary."""
        return {
            "date": self.date.isoformat(),
            "type": self.type.value,
            "price": self.price,
            "amount": self.amount,
            "balanceAfter": self.balance_after,
            "reason": self.reason,
        }
