"""
Integration tests for the full backtest pipeline.

Runs the engine over synthetic market data and checks the invariants every
run must hold.
"""

from datetime import date

import pytest

from neuroquant.core.enums import SignalType, StrategyMode
from neuroquant.core.models import StrategyConfig
from neuroquant.core.models.market import series_to_frame
from neuroquant.engine import run_backtest
from neuroquant.infrastructure.data import OHLCVValidator
from neuroquant.infrastructure.market import generate_market_data


class TestBacktestPipeline:
    """Integration tests over a year of synthetic bars."""

    @pytest.fixture
    def series(self):
        return generate_market_data(days=365, start_price=100.0, end_date=date(2025, 1, 1), seed=42)

    @pytest.fixture(
        params=[
            StrategyConfig(short_window=5, long_window=20, rsi_period=14),
            StrategyConfig(short_window=10, long_window=50, rsi_period=14, use_rsi_filter=True),
            StrategyConfig(short_window=2, long_window=3, rsi_period=2, initial_capital=250),
        ],
        ids=["fast", "filtered", "twitchy"],
    )
    def config(self, request) -> StrategyConfig:
        return request.param

    def test_should_pass_validation(self, series) -> None:
        assert OHLCVValidator().validate_data(series_to_frame(series))

    def test_should_alternate_buys_and_sells(self, series, config) -> None:
        result = run_backtest(series, config)

        types = [t.type for t in result.trades]
        if types:
            assert types[0] == SignalType.BUY
        assert all(a != b for a, b in zip(types, types[1:]))

    def test_should_record_one_history_point_per_bar(self, series, config) -> None:
        result = run_backtest(series, config)

        assert [p.date for p in result.history] == [b.date for b in series]
        warmup = result.history[: config.warmup_period]
        assert all(p.balance == config.initial_capital for p in warmup)

    def test_should_conserve_value_between_trades(self, series, config) -> None:
        result = run_backtest(series, config)

        closes = {b.date: b.close for b in series}
        for trade in result.trades:
            if trade.type == SignalType.SELL:
                assert trade.balance_after == pytest.approx(
                    next(p.balance for p in result.history if p.date == trade.date)
                )
            else:
                assert trade.price == closes[trade.date]

    def test_should_value_final_balance_at_last_close(self, series, config) -> None:
        result = run_backtest(series, config)

        assert result.final_balance == pytest.approx(result.history[-1].balance)
        assert result.total_return == pytest.approx(
            (result.final_balance - config.initial_capital) / config.initial_capital * 100
        )

    def test_should_bound_statistics(self, series, config) -> None:
        result = run_backtest(series, config)

        assert 0.0 <= result.win_rate <= 100.0
        assert 0.0 <= result.max_drawdown <= 100.0
        assert result.final_balance >= 0.0

    def test_should_match_drawdown_recomputed_from_history(self, series, config) -> None:
        result = run_backtest(series, config)

        peak = config.initial_capital
        worst = 0.0
        for point in result.history[config.warmup_period :]:
            peak = max(peak, point.balance)
            worst = max(worst, (peak - point.balance) / peak)
        assert result.max_drawdown == pytest.approx(worst * 100)

    def test_should_be_deterministic(self, series, config) -> None:
        assert run_backtest(series, config) == run_backtest(series, config)

    def test_should_replay_signals_generated_from_the_series(self, series) -> None:
        config = StrategyConfig(mode=StrategyMode.AI)
        signals = [
            {"date": series[i].date.isoformat(), "action": "BUY" if i % 60 == 0 else "SELL"}
            for i in range(0, 360, 30)
        ]

        result = run_backtest(series, config, signals)

        assert [t.type for t in result.trades] == [SignalType.BUY, SignalType.SELL] * 6
