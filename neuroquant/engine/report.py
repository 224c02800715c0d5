"""
Report aggregation.

Reduces a simulated portfolio into the final BacktestResult.
"""

from collections.abc import Sequence

from neuroquant.core.enums import SignalType
from neuroquant.core.models.backtest import BacktestResult
from neuroquant.core.models.portfolio import Portfolio
from neuroquant.core.models.trade import Trade


def calculate_total_return(final_balance: float, initial_capital: float) -> float:
    """Return on initial capital, in percent."""
    return (final_balance - initial_capital) / initial_capital * 100


def calculate_win_rate(trades: Sequence[Trade]) -> float:
    """
    Share of SELL trades that closed above their entry, in percent.

    Each SELL is paired with the nearest preceding BUY. A single forward pass
    keeps the last BUY price, which gives the same pairing as scanning back
    from every SELL. Zero SELLs give a win rate of 0.

    Args:
        trades: Chronological trade list

    Returns:
        Win rate between 0 and 100
    """
    entry_price = 0.0
    sells = 0
    profitable = 0
    for trade in trades:
        if trade.type == SignalType.BUY:
            entry_price = trade.price
        elif trade.type == SignalType.SELL:
            sells += 1
            if trade.price > entry_price:
                profitable += 1

    if sells == 0:
        return 0.0
    return profitable / sells * 100


class ReportAggregator:
    """Summary statistics for a finished simulation."""

    def aggregate(self, portfolio: Portfolio, last_close: float) -> BacktestResult:
        """
        Build the result of a run.

        Args:
            portfolio: Portfolio after the last bar
            last_close: Close of the final bar, used to value open holdings

        Returns:
            Immutable BacktestResult
        """
        final_balance = portfolio.equity(last_close)
        return BacktestResult(
            trades=tuple(portfolio.trades),
            final_balance=final_balance,
            total_return=calculate_total_return(final_balance, portfolio.initial_capital),
            win_rate=calculate_win_rate(portfolio.trades),
            max_drawdown=portfolio.max_drawdown * 100,
            history=tuple(portfolio.history),
        )
