"""
Single-asset, long-only portfolio state.

Holds the cash/holdings book that the simulator walks forward one bar at a
time, along with the trade log, the equity history and the running drawdown.
"""

from dataclasses import dataclass, field
from datetime import date

from loguru import logger

from neuroquant.core.constants import BUY_CASH_FRACTION
from neuroquant.core.enums import PositionState, SignalType
from neuroquant.core.exceptions.backtest import InvalidConfigError

from .backtest import EquityPoint
from .trade import Trade


@dataclass
class Portfolio:
    """Cash and holdings of one backtest run.

    The book is either FLAT (cash only) or LONG (all-in). BUY while LONG and
    SELL while FLAT are dropped without error.
    """

    initial_capital: float
    cash: float = field(init=False)
    holdings: float = field(init=False, default=0.0)
    peak_equity: float = field(init=False)
    max_drawdown: float = field(init=False, default=0.0)
    trades: list[Trade] = field(init=False, default_factory=list)
    history: list[EquityPoint] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        if self.initial_capital <= 0:
            raise InvalidConfigError("initial_capital", self.initial_capital, "must be positive")
        self.cash = self.initial_capital
        self.peak_equity = self.initial_capital

    @property
    def position_state(self) -> PositionState:
        """Current implicit position state."""
        return PositionState.LONG if self.holdings > 0 else PositionState.FLAT

    def equity(self, price: float) -> float:
        """Mark the book to market at the given price."""
        return self.cash + self.holdings * price

    def buy(self, trade_date: date, price: float, reason: str) -> Trade | None:
        """Commit 99% of available cash at the bar's close.

        Args:
            trade_date: Bar date
            price: Close price of the bar
            reason: Attribution carried onto the trade

        Returns:
            The recorded trade, or None when already LONG or cash does not exceed the price
        """
        if self.holdings > 0:
            logger.debug(f"{trade_date}: BUY dropped (already long)")
            return None
        if price <= 0 or self.cash <= price:
            logger.debug(f"{trade_date}: BUY dropped (cash={self.cash:.2f}, price={price})")
            return None

        amount = (self.cash * BUY_CASH_FRACTION) / price
        cost = amount * price
        if amount <= 0 or cost > self.cash:
            return None

        self.cash -= cost
        self.holdings += amount
        trade = Trade(
            date=trade_date,
            type=SignalType.BUY,
            price=price,
            amount=amount,
            balance_after=self.equity(price),
            reason=reason,
        )
        self.trades.append(trade)
        logger.debug(f"{trade_date}: BUY {amount:.8f} @ {price} ({reason})")
        return trade

    def sell(self, trade_date: date, price: float, reason: str) -> Trade | None:
        """Liquidate all holdings at the bar's close.

        Returns:
            The recorded trade, or None when the book is FLAT
        """
        if self.holdings <= 0:
            logger.debug(f"{trade_date}: SELL dropped (no holdings)")
            return None

        amount = self.holdings
        self.cash += amount * price
        self.holdings = 0.0
        trade = Trade(
            date=trade_date,
            type=SignalType.SELL,
            price=price,
            amount=amount,
            balance_after=self.cash,
            reason=reason,
        )
        self.trades.append(trade)
        logger.debug(f"{trade_date}: SELL {amount:.8f} @ {price} ({reason})")
        return trade

    def apply(
        self, signal: SignalType, trade_date: date, price: float, reason: str
    ) -> Trade | None:
        """Route a decision to buy/sell; HOLD and out-of-state signals record nothing."""
        if not self.position_state.accepts(signal):
            if signal.is_actionable:
                logger.debug(f"{trade_date}: {signal} ignored while {self.position_state}")
            return None
        if signal == SignalType.BUY:
            return self.buy(trade_date, price, reason)
        if signal == SignalType.SELL:
            return self.sell(trade_date, price, reason)
        return None

    def record_snapshot(self, snapshot_date: date, price: float) -> EquityPoint:
        """Append marked-to-market equity and update peak and drawdown."""
        balance = self.equity(price)
        point = EquityPoint(date=snapshot_date, balance=balance)
        self.history.append(point)

        self.peak_equity = max(self.peak_equity, balance)
        drawdown = (self.peak_equity - balance) / self.peak_equity
        self.max_drawdown = max(self.max_drawdown, drawdown)
        return point

    def record_idle(self, snapshot_date: date) -> EquityPoint:
        """Append a cash-only equity point without touching drawdown state."""
        point = EquityPoint(date=snapshot_date, balance=self.cash)
        self.history.append(point)
        return point
