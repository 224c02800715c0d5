"""Domain models for series, signals, trades, portfolios and results."""

from .backtest import BacktestResult, EquityPoint, StrategyConfig
from .market import PricePoint
from .portfolio import Portfolio
from .signal import ExternalSignal
from .trade import Trade

__all__ = [
    "PricePoint",
    "ExternalSignal",
    "Trade",
    "StrategyConfig",
    "EquityPoint",
    "BacktestResult",
    "Portfolio",
]
