"""
Unit tests for the market data service.
"""

from unittest.mock import Mock

import pytest

from neuroquant.core.enums import Exchange
from neuroquant.core.exceptions.backtest import MarketDataError
from neuroquant.infrastructure.market import ExchangeClient, MarketDataService


def client_returning(series) -> Mock:
    client = Mock(spec=ExchangeClient)
    client.fetch_daily.return_value = series
    return client


def failing_client() -> Mock:
    client = Mock(spec=ExchangeClient)
    client.fetch_daily.side_effect = MarketDataError(Exchange.BINANCE, "BTCUSDT", "timeout")
    return client


class TestMarketDataService:
    """Test suite for MarketDataService."""

    def test_should_return_live_data(self, series_factory) -> None:
        series = series_factory([1, 2, 3])
        client = client_returning(series)
        service = MarketDataService(clients={Exchange.BINANCE: client})

        result = service.fetch("btc", Exchange.BINANCE)

        client.fetch_daily.assert_called_once_with("BTCUSDT")
        assert result.data == series
        assert result.is_simulation is False
        assert result.symbol == "BTCUSDT"

    def test_should_cache_live_data(self, series_factory) -> None:
        client = client_returning(series_factory([1, 2, 3]))
        service = MarketDataService(clients={Exchange.OKX: client})

        service.fetch("ETH", Exchange.OKX)
        service.fetch("ETH", Exchange.OKX)

        assert client.fetch_daily.call_count == 1

        service.clear_cache()
        service.fetch("ETH", Exchange.OKX)
        assert client.fetch_daily.call_count == 2

    def test_should_fall_back_to_simulation_on_exchange_failure(self) -> None:
        service = MarketDataService(clients={Exchange.BINANCE: failing_client()}, simulation_seed=5)

        result = service.fetch("BTC", Exchange.BINANCE)

        assert result.is_simulation is True
        assert len(result.data) == 365
        assert result.data[0].open == 65000.0

    def test_should_not_cache_simulated_data(self) -> None:
        client = failing_client()
        service = MarketDataService(clients={Exchange.BINANCE: client}, simulation_seed=5)

        service.fetch("BTC", Exchange.BINANCE)
        service.fetch("BTC", Exchange.BINANCE)

        assert client.fetch_daily.call_count == 2

    def test_should_fall_back_on_empty_payload(self) -> None:
        service = MarketDataService(clients={Exchange.COINBASE: client_returning([])})
        assert service.fetch("SOL", Exchange.COINBASE).is_simulation is True

    def test_should_fall_back_on_invalid_bars(self, series_factory) -> None:
        series = series_factory([3, 2, 1])[::-1]  # newest first
        service = MarketDataService(clients={Exchange.BINANCE: client_returning(series)})

        assert service.fetch("BTC", Exchange.BINANCE).is_simulation is True

    def test_should_serialise_result(self, series_factory) -> None:
        client = client_returning(series_factory([1]))
        service = MarketDataService(clients={Exchange.BINANCE: client})

        data = service.fetch("BTC", Exchange.BINANCE).to_dict()

        assert data["exchange"] == "BINANCE"
        assert data["isSimulation"] is False
        assert data["data"][0]["date"] == "2024-01-01"

    @pytest.mark.parametrize(("asset", "start"), [("DOGE", 0.15), ("XRP", 100.0)])
    def test_should_simulate_from_asset_start_price(self, asset: str, start: float) -> None:
        service = MarketDataService(clients={}, simulation_seed=1)
        assert service.simulate(asset, Exchange.OKX).data[0].open == start
