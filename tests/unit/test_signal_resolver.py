"""
Unit tests for signal resolution and the external signal map.
"""

from datetime import date

import numpy as np
import pandas as pd
import pytest

from neuroquant.core.enums import SignalType, StrategyMode
from neuroquant.core.exceptions.backtest import InvalidInputError
from neuroquant.core.models import ExternalSignal, PricePoint, StrategyConfig
from neuroquant.engine import Decision, SignalResolver, build_signal_map
from neuroquant.infrastructure.data.technical_indicators import IndicatorSet

NAN = np.nan


def make_indicators(short: list[float], long: list[float], rsi: list[float]) -> IndicatorSet:
    return IndicatorSet(
        short_sma=pd.Series(short, dtype=float),
        long_sma=pd.Series(long, dtype=float),
        rsi=pd.Series(rsi, dtype=float),
    )


def bar(day: int, close: float = 100.0) -> PricePoint:
    return PricePoint(date(2024, 1, day), close, close, close, close, 1.0)


class TestBuildSignalMap:
    """Test suite for build_signal_map."""

    def test_should_return_empty_map_without_signals(self) -> None:
        assert build_signal_map(None) == {}
        assert build_signal_map([]) == {}

    def test_should_index_signals_by_calendar_day(self) -> None:
        signal_map = build_signal_map(
            [
                {"date": "2024-01-02T00:00:00Z", "action": "buy", "reason": "dip", "confidence": 90},
                ExternalSignal(date(2024, 1, 5), SignalType.SELL, "top"),
            ]
        )

        assert set(signal_map) == {date(2024, 1, 2), date(2024, 1, 5)}
        assert signal_map[date(2024, 1, 2)].action == SignalType.BUY
        assert signal_map[date(2024, 1, 2)].confidence == 90.0

    def test_should_let_later_duplicates_win(self) -> None:
        signal_map = build_signal_map(
            [
                {"date": "2024-01-02", "action": "BUY"},
                {"date": "2024-01-02", "action": "SELL"},
            ]
        )
        assert signal_map[date(2024, 1, 2)].action == SignalType.SELL

    def test_should_skip_malformed_entries(self) -> None:
        signal_map = build_signal_map(
            [
                {"date": "not-a-date", "action": "BUY"},
                {"date": "2024-01-03", "action": "HOLD"},
                {"date": "2024-01-04", "action": "SHORT"},
                {"action": "BUY"},
                {"date": "2024-01-05", "action": "SELL", "strategySource": "DEEPSEEK"},
            ]
        )

        assert list(signal_map) == [date(2024, 1, 5)]
        assert signal_map[date(2024, 1, 5)].strategy_source == "DEEPSEEK"

    def test_should_skip_entries_that_are_not_objects(self) -> None:
        signal_map = build_signal_map(
            ["garbage", None, 5, ["2024-01-01", "BUY"], {"date": "2024-01-02", "action": "BUY"}]
        )

        assert list(signal_map) == [date(2024, 1, 2)]


class TestSignalResolverAlgo:
    """Test suite for crossover resolution."""

    @pytest.fixture
    def config(self) -> StrategyConfig:
        return StrategyConfig(short_window=2, long_window=3, rsi_period=2)

    def test_should_require_indicators(self, config: StrategyConfig) -> None:
        with pytest.raises(InvalidInputError, match="indicators"):
            SignalResolver(config)

    def test_should_hold_during_warmup(self, config: StrategyConfig) -> None:
        resolver = SignalResolver(config, make_indicators([1] * 5, [1] * 5, [50] * 5))

        assert resolver.in_warmup(2)
        assert not resolver.in_warmup(3)
        assert resolver.resolve(2, bar(3)) == Decision(SignalType.HOLD)

    def test_should_buy_on_golden_cross_with_tie_on_prior_bar(self, config: StrategyConfig) -> None:
        resolver = SignalResolver(
            config, make_indicators([0, 0, 0, 10, 11], [0, 0, 0, 10, 10.5], [50] * 5)
        )

        decision = resolver.resolve(4, bar(5))

        assert decision == Decision(SignalType.BUY, "Technical Signal")

    def test_should_sell_on_death_cross(self, config: StrategyConfig) -> None:
        indicators = make_indicators([0, 0, 0, 12, 9], [0, 0, 0, 11, 10], [50] * 5)
        resolver = SignalResolver(config, indicators)
        assert resolver.resolve(4, bar(5)).signal == SignalType.SELL

    def test_should_hold_without_crossing(self, config: StrategyConfig) -> None:
        indicators = make_indicators([0, 0, 0, 12, 13], [0, 0, 0, 11, 11], [50] * 5)
        resolver = SignalResolver(config, indicators)
        assert resolver.resolve(4, bar(5)) == Decision(SignalType.HOLD)

    def test_should_hold_when_indicators_are_undefined(self, config: StrategyConfig) -> None:
        resolver = SignalResolver(
            config, make_indicators([NAN] * 5, [NAN, NAN, NAN, NAN, 1], [NAN] * 5)
        )
        assert resolver.resolve(4, bar(5)) == Decision(SignalType.HOLD)

    def test_should_gate_buys_on_oversold_rsi(self) -> None:
        config = StrategyConfig(short_window=2, long_window=3, rsi_period=2, use_rsi_filter=True)
        golden = ([0, 0, 0, 9, 11], [0, 0, 0, 10, 10])

        blocked = SignalResolver(config, make_indicators(*golden, [50] * 5))
        allowed = SignalResolver(config, make_indicators(*golden, [50, 50, 50, 50, 25]))

        assert blocked.resolve(4, bar(5)).signal == SignalType.HOLD
        assert allowed.resolve(4, bar(5)).signal == SignalType.BUY

    def test_should_force_sell_on_overbought_rsi(self) -> None:
        config = StrategyConfig(short_window=2, long_window=3, rsi_period=2, use_rsi_filter=True)
        resolver = SignalResolver(
            config, make_indicators([0, 0, 0, 12, 13], [0, 0, 0, 11, 11], [50, 50, 50, 50, 85])
        )
        assert resolver.resolve(4, bar(5)).signal == SignalType.SELL

    def test_should_ignore_rsi_without_filter(self, config: StrategyConfig) -> None:
        resolver = SignalResolver(
            config, make_indicators([0, 0, 0, 12, 13], [0, 0, 0, 11, 11], [99] * 5)
        )
        assert resolver.resolve(4, bar(5)).signal == SignalType.HOLD


class TestSignalResolverAI:
    """Test suite for external signal resolution."""

    @pytest.fixture
    def config(self) -> StrategyConfig:
        return StrategyConfig(mode=StrategyMode.AI)

    def test_should_not_warm_up(self, config: StrategyConfig) -> None:
        assert not SignalResolver(config).in_warmup(0)

    def test_should_replay_signal_for_bar_date(self, config: StrategyConfig) -> None:
        signal_map = build_signal_map(
            [{"date": "2024-01-02", "action": "BUY", "reason": "breakout"}]
        )
        resolver = SignalResolver(config, signal_map=signal_map)

        assert resolver.resolve(0, bar(1)) == Decision(SignalType.HOLD)
        assert resolver.resolve(1, bar(2)) == Decision(SignalType.BUY, "breakout")

    def test_should_use_default_reason_when_missing(self, config: StrategyConfig) -> None:
        signal_map = build_signal_map([{"date": "2024-01-02", "action": "SELL"}])
        resolver = SignalResolver(config, signal_map=signal_map)

        assert resolver.resolve(1, bar(2)).reason == "Technical Signal"
