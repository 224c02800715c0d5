"""
Signal resolution.

Turns indicators or an external signal map into one trading decision per bar.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from loguru import logger

from neuroquant.core.constants import DEFAULT_TRADE_REASON
from neuroquant.core.enums import SignalType, StrategyMode
from neuroquant.core.exceptions.backtest import InvalidInputError, ValidationError
from neuroquant.core.models.backtest import StrategyConfig
from neuroquant.core.models.market import PricePoint
from neuroquant.core.models.signal import ExternalSignal
from neuroquant.core.utils.validation import parse_calendar_day
from neuroquant.infrastructure.data.technical_indicators import IndicatorSet


@dataclass(frozen=True)
class Decision:
    """Decision for one bar and the reason attached to a resulting trade."""

    signal: SignalType
    reason: str = ""


HOLD = Decision(SignalType.HOLD)


def build_signal_map(
    signals: Iterable[ExternalSignal | Mapping[str, Any]] | None,
) -> dict[date, ExternalSignal]:
    """
    Index external signals by calendar day.

    Mappings are parsed leniently: entries with an unparseable date or an
    action other than BUY/SELL are skipped. A later entry for the same date
    replaces an earlier one.

    Args:
        signals: ExternalSignal objects or raw provider dictionaries

    Returns:
        Read-only lookup table for one backtest run
    """
    signal_map: dict[date, ExternalSignal] = {}
    if not signals:
        return signal_map

    skipped = 0
    for raw in signals:
        if isinstance(raw, ExternalSignal):
            signal_map[raw.date] = raw
            continue
        if not isinstance(raw, Mapping):
            skipped += 1
            logger.debug(f"Skipping external signal that is not an object: {raw!r}")
            continue
        try:
            signal = _parse_signal(raw)
        except (ValidationError, ValueError, TypeError, KeyError) as e:
            skipped += 1
            logger.debug(f"Skipping malformed external signal {raw!r}: {e}")
            continue
        signal_map[signal.date] = signal

    if skipped:
        logger.warning(f"Skipped {skipped} malformed external signals")
    return signal_map


def _parse_signal(raw: Mapping[str, Any]) -> ExternalSignal:
    confidence = raw.get("confidence")
    return ExternalSignal(
        date=parse_calendar_day(raw["date"]),
        action=SignalType.from_token(raw["action"]),
        reason=str(raw.get("reason") or ""),
        confidence=float(confidence) if confidence is not None else None,
        strategy_source=raw.get("strategySource") or raw.get("strategy_source"),
    )


class SignalResolver:
    """
    Resolve the decision for each bar of a series.

    ALGO mode fires on SMA crossovers, optionally gated/forced by RSI.
    AI mode replays the external signal for the bar's date.
    """

    def __init__(
        self,
        config: StrategyConfig,
        indicators: IndicatorSet | None = None,
        signal_map: Mapping[date, ExternalSignal] | None = None,
    ) -> None:
        if config.mode == StrategyMode.ALGO and indicators is None:
            raise InvalidInputError("ALGO mode requires precomputed indicators")
        self.config = config
        self.indicators = indicators
        self.signal_map: Mapping[date, ExternalSignal] = signal_map or {}

    def in_warmup(self, index: int) -> bool:
        """Check if the bar falls before indicators are trusted."""
        return self.config.mode.has_warmup and index < self.config.warmup_period

    def resolve(self, index: int, point: PricePoint) -> Decision:
        """
        Decide what to do on bar ``index``.

        Args:
            index: Position of the bar in the series
            point: The bar itself

        Returns:
            BUY, SELL or HOLD with its reason
        """
        if self.config.mode == StrategyMode.AI:
            return self._resolve_external(point)
        if self.in_warmup(index):
            return HOLD
        return self._resolve_crossover(index)

    def _resolve_external(self, point: PricePoint) -> Decision:
        signal = self.signal_map.get(point.date)
        if signal is None:
            return HOLD
        return Decision(signal.action, signal.reason or DEFAULT_TRADE_REASON)

    def _resolve_crossover(self, index: int) -> Decision:
        config = self.config
        short_sma = self.indicators.short_sma
        long_sma = self.indicators.long_sma

        prev_short, curr_short = short_sma.iat[index - 1], short_sma.iat[index]
        prev_long, curr_long = long_sma.iat[index - 1], long_sma.iat[index]
        rsi = self.indicators.rsi.iat[index]

        # NaN operands compare false, so undefined indicators resolve to HOLD
        crossover_buy = prev_short <= prev_long and curr_short > curr_long
        crossover_sell = prev_short >= prev_long and curr_short < curr_long

        buy_allowed = not config.use_rsi_filter or rsi < config.rsi_oversold
        sell_forced = config.use_rsi_filter and rsi > config.rsi_overbought

        if crossover_buy and buy_allowed:
            return Decision(SignalType.BUY, DEFAULT_TRADE_REASON)
        if crossover_sell or sell_forced:
            return Decision(SignalType.SELL, DEFAULT_TRADE_REASON)
        return HOLD
