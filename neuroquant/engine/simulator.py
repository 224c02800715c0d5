"""
Portfolio simulation.

Walks a series once, applying resolved decisions to a fresh Portfolio.
"""

from collections.abc import Sequence

from loguru import logger

from neuroquant.core.models.backtest import StrategyConfig
from neuroquant.core.models.market import PricePoint
from neuroquant.core.models.portfolio import Portfolio

from .signal_resolver import SignalResolver


class PortfolioSimulator:
    """Single forward pass of decisions over cash and holdings."""

    def __init__(self, config: StrategyConfig, resolver: SignalResolver) -> None:
        self.config = config
        self.resolver = resolver

    def run(self, series: Sequence[PricePoint]) -> Portfolio:
        """
        Simulate the strategy bar by bar.

        Warm-up bars record cash-only equity and leave peak/drawdown alone.
        Every other bar applies its decision at the close, then marks the
        book to market.

        Args:
            series: Chronological price bars

        Returns:
            The final portfolio, holding trades and equity history
        """
        portfolio = Portfolio(initial_capital=self.config.initial_capital)

        for index, point in enumerate(series):
            if self.resolver.in_warmup(index):
                portfolio.record_idle(point.date)
                continue

            decision = self.resolver.resolve(index, point)
            if decision.signal.is_actionable:
                portfolio.apply(decision.signal, point.date, point.close, decision.reason)
            portfolio.record_snapshot(point.date, point.close)

        logger.debug(
            f"Simulated {len(series)} bars: {len(portfolio.trades)} trades, "
            f"final state {portfolio.position_state}"
        )
        return portfolio
