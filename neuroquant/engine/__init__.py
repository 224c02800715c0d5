"""
Backtest engine.

Indicator-driven or externally-signalled simulation of a single-asset,
long-only strategy over a daily price series.
"""

from .backtest_engine import run_backtest
from .report import ReportAggregator, calculate_total_return, calculate_win_rate
from .signal_resolver import Decision, SignalResolver, build_signal_map
from .simulator import PortfolioSimulator

__all__ = [
    "run_backtest",
    "SignalResolver",
    "Decision",
    "build_signal_map",
    "PortfolioSimulator",
    "ReportAggregator",
    "calculate_total_return",
    "calculate_win_rate",
]
