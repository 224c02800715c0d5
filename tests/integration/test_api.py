"""
Integration tests for the HTTP API.

The market data service and settings are overridden so no request leaves
the process.
"""

from collections.abc import Iterator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from neuroquant.api import main
from neuroquant.api.dependencies import get_app_settings, get_market_service
from neuroquant.api.main import app
from neuroquant.core.enums import Exchange
from neuroquant.core.exceptions.backtest import MarketDataError
from neuroquant.infrastructure.market import ExchangeClient, MarketDataService
from neuroquant.settings import Settings


def bars(closes: list[float], start_day: int = 1) -> list[dict]:
    return [
        {
            "date": f"2024-01-{start_day + i:02d}",
            "open": close,
            "high": close,
            "low": close,
            "close": close,
            "volume": 1000,
        }
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def client() -> Iterator[TestClient]:
    offline = Mock(spec=ExchangeClient)
    offline.fetch_daily.side_effect = MarketDataError(Exchange.BINANCE, "BTCUSDT", "offline")
    service = MarketDataService(
        clients={exchange: offline for exchange in Exchange}, simulation_seed=11
    )
    settings = Settings(
        _env_file=None,
        GEMINI_API_KEY=None,
        DEEPSEEK_API_KEY=None,
        OPENAI_API_KEY=None,
        CUSTOM_API_KEY=None,
    )

    app.dependency_overrides[get_market_service] = lambda: service
    app.dependency_overrides[get_app_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestMetaEndpoints:
    """Tests for root and health endpoints."""

    def test_should_report_status(self, client: TestClient) -> None:
        assert client.get("/").json()["status"] == "running"
        assert client.get("/health").json() == {"status": "healthy"}

    def test_should_serve_app_with_uvicorn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        run = Mock()
        monkeypatch.setattr(main.uvicorn, "run", run)

        main.serve()

        run.assert_called_once_with(
            main.app,
            host=main.settings.host,
            port=main.settings.port,
            log_level=main.settings.log_level.lower(),
        )


class TestDataEndpoints:
    """Tests for the data router."""

    def test_should_list_assets_exchanges_and_providers(self, client: TestClient) -> None:
        body = client.get("/api/data/assets").json()

        assert {"value": "BTC", "label": "Bitcoin (BTC)"} in body["assets"]
        assert len(body["assets"]) == 8
        assert body["exchanges"] == ["BINANCE", "OKX", "COINBASE"]
        assert body["providers"] == ["GEMINI", "DEEPSEEK", "OPENAI", "CUSTOM"]

    def test_should_serve_simulated_series_when_exchange_is_down(self, client: TestClient) -> None:
        response = client.get("/api/data/market", params={"asset": "ETH", "exchange": "OKX"})

        assert response.status_code == 200
        body = response.json()
        assert body["isSimulation"] is True
        assert body["symbol"] == "ETH-USDT"
        assert len(body["data"]) == 365
        assert body["data"][0]["open"] == 3500.0

    def test_should_reject_unknown_exchange(self, client: TestClient) -> None:
        response = client.get("/api/data/market", params={"asset": "BTC", "exchange": "KRAKEN"})
        assert response.status_code == 422


class TestBacktestEndpoint:
    """Tests for the backtest router."""

    def test_should_run_algo_backtest_on_posted_series(self, client: TestClient) -> None:
        payload = {
            "config": {"initialCapital": 1000, "shortWindow": 2, "longWindow": 3, "rsiPeriod": 2},
            "series": bars([10, 10, 10, 12, 14, 11, 8, 8]),
        }

        response = client.post("/api/backtest/", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert [t["type"] for t in body["trades"]] == ["BUY", "SELL"]
        assert body["trades"][0]["balanceAfter"] == pytest.approx(1000.0)
        assert body["finalBalance"] == pytest.approx(670.0)
        assert body["totalReturn"] == pytest.approx(-33.0)
        assert len(body["history"]) == 8
        assert body["isSimulation"] is False

    def test_should_fetch_series_when_none_posted(self, client: TestClient) -> None:
        payload = {
            "config": {"shortWindow": 5, "longWindow": 20},
            "asset": "SOL",
            "exchange": "COINBASE",
        }

        body = client.post("/api/backtest/", json=payload).json()

        assert body["isSimulation"] is True
        assert len(body["history"]) == 365

    def test_should_replay_posted_ai_signals(self, client: TestClient) -> None:
        payload = {
            "config": {"mode": "AI", "initialCapital": 1000},
            "series": bars([10, 20, 25, 15]),
            "signals": [
                {"date": "2024-01-01", "action": "BUY", "reason": "entry"},
                {"date": "2024-01-03", "action": "SELL", "reason": "exit"},
                {"date": "garbage", "action": "BUY"},
            ],
        }

        body = client.post("/api/backtest/", json=payload).json()

        trades = [(t["type"], t["reason"]) for t in body["trades"]]
        assert trades == [("BUY", "entry"), ("SELL", "exit")]
        assert body["winRate"] == 100.0

    def test_should_hold_when_ai_provider_has_no_key(self, client: TestClient) -> None:
        payload = {
            "config": {"mode": "AI"},
            "series": bars([10, 20, 25]),
            "ai": {"provider": "OPENAI"},
        }

        body = client.post("/api/backtest/", json=payload).json()

        assert body["signals"] == []
        assert body["trades"] == []
        assert body["finalBalance"] == 10000

    def test_should_map_invalid_config_to_422(self, client: TestClient) -> None:
        payload = {"config": {"shortWindow": 0}, "series": bars([1, 2, 3])}

        response = client.post("/api/backtest/", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "InvalidConfigError"
        assert body["details"] == {
            "field": "short_window",
            "constraint": "must be a positive integer",
        }

    def test_should_map_empty_series_to_422(self, client: TestClient) -> None:
        response = client.post("/api/backtest/", json={"series": []})

        assert response.status_code == 422
        assert response.json()["error"] == "InvalidInputError"


class TestAiEndpoints:
    """Tests for the AI router."""

    def test_should_return_no_signals_without_key(self, client: TestClient) -> None:
        payload = {"series": bars([1, 2, 3]), "ai": {"provider": "GEMINI"}}

        response = client.post("/api/ai/signals", json=payload)

        assert response.status_code == 200
        assert response.json() == {"signals": []}

    def test_should_reject_empty_series(self, client: TestClient) -> None:
        assert client.post("/api/ai/signals", json={"series": []}).status_code == 422

    def test_should_report_missing_analysis_as_bad_gateway(self, client: TestClient) -> None:
        payload = {"series": bars([1, 2, 3]), "ai": {"provider": "DEEPSEEK"}}

        response = client.post("/api/ai/analyze", json=payload)

        assert response.status_code == 502
