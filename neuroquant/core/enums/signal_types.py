"""
Signal and position state enumerations.

This module defines the trading decisions the engine understands and the
implicit position states of the single-asset book.
"""

from enum import StrEnum


class SignalType(StrEnum):
    """
    Trading decision for a single bar.

    Values are upper-case to match the wire format used by signal providers.
    """

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"

    @property
    def is_actionable(self) -> bool:
        """Check if the decision can produce a trade."""
        return self != self.HOLD

    @classmethod
    def from_token(cls, token: str) -> "SignalType":
        """
        Parse a provider action token, case-insensitively.

        Args:
            token: Raw action string (e.g., "buy", " SELL ")

        Returns:
            Corresponding SignalType

        Raises:
            ValueError: If the token is not a known action
        """
        try:
            return cls(token.strip().upper())
        except (AttributeError, ValueError) as e:
            raise ValueError(f"Unknown signal action: {token!r}") from e


class PositionState(StrEnum):
    """
    Implicit position state of the simulated book.

    FLAT holds only cash; LONG is fully invested in the asset.
    """

    FLAT = "FLAT"
    LONG = "LONG"

    def accepts(self, signal: SignalType) -> bool:
        """Check if a decision would change this state."""
        if signal == SignalType.BUY:
            return self == self.FLAT
        if signal == SignalType.SELL:
            return self == self.LONG
        return False
