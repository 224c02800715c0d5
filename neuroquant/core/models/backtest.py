"""
Backtest configuration and results models.
"""

from dataclasses import dataclass
from datetime import date

from neuroquant.core.constants import (
    DEFAULT_INITIAL_CAPITAL,
    DEFAULT_LONG_WINDOW,
    DEFAULT_RSI_OVERBOUGHT,
    DEFAULT_RSI_OVERSOLD,
    DEFAULT_RSI_PERIOD,
    DEFAULT_SHORT_WINDOW,
)
from neuroquant.core.enums import SignalType, StrategyMode
from neuroquant.core.exceptions.backtest import InvalidConfigError
from neuroquant.core.utils.validation import (
    validate_percentage,
    validate_positive,
    validate_positive_int,
)

from .trade import Trade


@dataclass(frozen=True)
class StrategyConfig:
    """Configuration for a single backtest run."""

    mode: StrategyMode = StrategyMode.ALGO
    initial_capital: float = DEFAULT_INITIAL_CAPITAL
    short_window: int = DEFAULT_SHORT_WINDOW
    long_window: int = DEFAULT_LONG_WINDOW
    rsi_period: int = DEFAULT_RSI_PERIOD
    rsi_overbought: float = DEFAULT_RSI_OVERBOUGHT
    rsi_oversold: float = DEFAULT_RSI_OVERSOLD
    use_rsi_filter: bool = False

    def validate(self) -> "StrategyConfig":
        """
        Check every field and fail on the first violation.

        Returns:
            The config itself, for chaining

        Raises:
            InvalidConfigError: If any field is out of range
        """
        if not isinstance(self.mode, StrategyMode):
            raise InvalidConfigError("mode", self.mode, "must be a StrategyMode")
        validate_positive(self.initial_capital, "initial_capital")
        validate_positive_int(self.short_window, "short_window")
        validate_positive_int(self.long_window, "long_window")
        validate_positive_int(self.rsi_period, "rsi_period")
        validate_percentage(self.rsi_overbought, "rsi_overbought")
        validate_percentage(self.rsi_oversold, "rsi_oversold")
        if not isinstance(self.use_rsi_filter, bool):
            raise InvalidConfigError("use_rsi_filter", self.use_rsi_filter, "must be a boolean")
        return self

    def is_valid(self) -> bool:
        """Check the config without raising."""
        try:
            self.validate()
        except InvalidConfigError:
            return False
        return True

    @property
    def warmup_period(self) -> int:
        """Bars to skip in ALGO mode before indicators are trusted."""
        return max(self.long_window, self.rsi_period)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "mode": self.mode.value,
            "initialCapital": self.initial_capital,
            "shortWindow": self.short_window,
            "longWindow": self.long_window,
            "rsiPeriod": self.rsi_period,
            "rsiOverbought": self.rsi_overbought,
            "rsiOversold": self.rsi_oversold,
            "useRsiFilter": self.use_rsi_filter,
        }


@dataclass(frozen=True)
class EquityPoint:
    """Marked-to-market equity at the close of one bar."""

    date: date
    balance: float

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "balance": self.balance}


@dataclass(frozen=True)
class BacktestResult:
    """Results from a backtest execution."""

    trades: tuple[Trade, ...]
    final_balance: float
    total_return: float
    win_rate: float
    max_drawdown: float
    history: tuple[EquityPoint, ...]

    @property
    def buy_count(self) -> int:
        return sum(1 for trade in self.trades if trade.type == SignalType.BUY)

    @property
    def sell_count(self) -> int:
        return sum(1 for trade in self.trades if trade.type == SignalType.SELL)

    def performance_summary(self) -> dict:
        """Get a summary of key performance metrics."""
        if not self.history:
            return {}

        return {
            "start_date": self.history[0].date.isoformat(),
            "end_date": self.history[-1].date.isoformat(),
            "final_balance": self.final_balance,
            "total_return": self.total_return,
            "win_rate": self.win_rate,
            "max_drawdown": self.max_drawdown,
            "trades": len(self.trades),
        }

    def is_profitable(self) -> bool:
        """Check if the backtest was profitable."""
        return self.total_return > 0.0

    def to_dict(self) -> dict:
        """Convert results to dictionary."""
        return {
            "trades": [trade.to_dict() for trade in self.trades],
            "finalBalance": self.final_balance,
            "totalReturn": self.total_return,
            "winRate": self.win_rate,
            "maxDrawdown": self.max_drawdown,
            "history": [point.to_dict() for point in self.history],
        }
