"""
Backtest engine.

Pure entry point: (series, config, optional external signals) -> BacktestResult.
All network I/O happens in the collaborators before this is called.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import pandas as pd
from loguru import logger

from neuroquant.core.exceptions.backtest import InvalidInputError
from neuroquant.core.models.backtest import BacktestResult, StrategyConfig
from neuroquant.core.models.market import PricePoint, frame_to_series
from neuroquant.core.models.signal import ExternalSignal
from neuroquant.core.utils.decorators import log_backtest
from neuroquant.infrastructure.data.technical_indicators import IndicatorSet

from .report import ReportAggregator
from .signal_resolver import SignalResolver, build_signal_map
from .simulator import PortfolioSimulator


def _coerce_series(series: Sequence[PricePoint] | pd.DataFrame) -> list[PricePoint]:
    if isinstance(series, pd.DataFrame):
        return frame_to_series(series)
    if not isinstance(series, Sequence):
        raise InvalidInputError(
            f"Series must be a sequence of PricePoint, got {type(series).__name__}"
        )

    points = list(series)
    for point in points:
        if not isinstance(point, PricePoint):
            raise InvalidInputError(
                f"Series must contain PricePoint bars, got {type(point).__name__}"
            )
    return points


@log_backtest
def run_backtest(
    series: Sequence[PricePoint] | pd.DataFrame,
    config: StrategyConfig,
    external_signals: Iterable[ExternalSignal | Mapping[str, Any]] | None = None,
) -> BacktestResult:
    """
    Simulate a strategy over a price series and score it.

    Args:
        series: Chronological daily bars (or an OHLCV DataFrame)
        config: Strategy configuration
        external_signals: Dated BUY/SELL decisions, used only in AI mode

    Returns:
        Trades, equity history and summary statistics

    Raises:
        InvalidConfigError: If the config violates its constraints
        InvalidInputError: If the series is empty or not made of price bars
    """
    config.validate()
    points = _coerce_series(series)
    if not points:
        raise InvalidInputError("Cannot backtest an empty price series")

    signal_map = {}
    if config.mode.uses_external_signals:
        if external_signals is None:
            logger.warning("AI mode without external signals: every bar resolves to HOLD")
        signal_map = build_signal_map(external_signals)
    elif external_signals is not None:
        logger.debug("External signals ignored in ALGO mode")

    indicators = IndicatorSet.compute(
        points, config.short_window, config.long_window, config.rsi_period
    )
    resolver = SignalResolver(config, indicators, signal_map)
    portfolio = PortfolioSimulator(config, resolver).run(points)
    result = ReportAggregator().aggregate(portfolio, points[-1].close)

    logger.info(
        f"Backtest {config.mode} over {len(points)} bars: "
        f"return={result.total_return:.2f}% win_rate={result.win_rate:.2f}% "
        f"max_drawdown={result.max_drawdown:.2f}% trades={len(result.trades)}"
    )
    return result
