"""
Exchange REST clients for daily candles.

Each client fetches raw candles with requests and normalises them into
chronological PricePoint bars. Parsing is kept in module-level functions so
payloads can be checked without network access.
"""

from datetime import UTC, datetime
from typing import Any

import requests
from loguru import logger

from neuroquant.core.constants import (
    BINANCE_KLINE_LIMIT,
    COINBASE_DAILY_GRANULARITY,
    OKX_CANDLE_LIMIT,
)
from neuroquant.core.enums import Exchange
from neuroquant.core.exceptions.backtest import MarketDataError
from neuroquant.core.interfaces.data import IMarketDataProvider
from neuroquant.core.models.market import PricePoint


def _utc_day(timestamp_seconds: float):
    return datetime.fromtimestamp(timestamp_seconds, tz=UTC).date()


def parse_binance_klines(rows: list[list[Any]]) -> list[PricePoint]:
    """Parse Binance klines ``[open_time_ms, o, h, l, c, v, ...]`` (oldest first)."""
    return [
        PricePoint(
            date=_utc_day(int(row[0]) / 1000),
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[5]),
        )
        for row in rows
    ]


def parse_okx_candles(body: dict[str, Any]) -> list[PricePoint]:
    """
    Parse an OKX candles response.

    OKX wraps rows ``[ts_ms, o, h, l, c, vol, ...]`` in ``{"code": "0", "data": [...]}``
    and returns them newest first.

    Raises:
        MarketDataError: If OKX reports a non-zero code
    """
    if str(body.get("code")) != "0":
        raise MarketDataError(Exchange.OKX, "", body.get("msg") or "unknown OKX error")

    rows = list(reversed(body.get("data") or []))
    return [
        PricePoint(
            date=_utc_day(int(row[0]) / 1000),
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[5]),
        )
        for row in rows
    ]


def parse_coinbase_candles(rows: list[list[Any]]) -> list[PricePoint]:
    """Parse Coinbase candles ``[time_s, low, high, open, close, volume]`` (newest first)."""
    return [
        PricePoint(
            date=_utc_day(float(row[0])),
            low=float(row[1]),
            high=float(row[2]),
            open=float(row[3]),
            close=float(row[4]),
            volume=float(row[5]),
        )
        for row in reversed(rows)
    ]


class ExchangeClient(IMarketDataProvider):
    """Base client with a shared session and retrying JSON GET."""

    exchange: Exchange

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = 10.0,
        max_retries: int = 2,
        user_agent: str = "neuroquant/1.0",
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
        self.timeout = timeout
        self.max_retries = max_retries

    def _get_json(self, url: str, params: dict[str, Any], symbol: str) -> Any:
        """GET a JSON document, retrying transport failures."""
        for attempt in range(self.max_retries):
            try:
                logger.debug(
                    f"Fetching {self.exchange} {symbol} (attempt {attempt + 1}/{self.max_retries})"
                )
                response = self.session.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()
            except requests.exceptions.JSONDecodeError as e:
                raise MarketDataError(self.exchange, symbol, f"invalid JSON: {e}") from e
            except requests.exceptions.RequestException as e:
                logger.warning(f"{self.exchange} attempt {attempt + 1} failed: {e}")
                if attempt == self.max_retries - 1:
                    raise MarketDataError(self.exchange, symbol, str(e)) from e

        raise MarketDataError(self.exchange, symbol, "no attempts made")

    def fetch_daily(self, symbol: str) -> list[PricePoint]:
        """Fetch and parse daily bars, wrapping malformed payloads."""
        payload = self._request(symbol)
        try:
            return self._parse(payload)
        except MarketDataError as e:
            raise MarketDataError(self.exchange, symbol, e.reason) from e
        except (TypeError, ValueError, KeyError, IndexError) as e:
            raise MarketDataError(self.exchange, symbol, f"malformed candles: {e}") from e

    def _request(self, symbol: str) -> Any:
        raise NotImplementedError

    def _parse(self, payload: Any) -> list[PricePoint]:
        raise NotImplementedError


class BinanceClient(ExchangeClient):
    """Binance spot klines."""

    exchange = Exchange.BINANCE
    BASE_URL = "https://api.binance.com/api/v3/klines"

    def _request(self, symbol: str) -> Any:
        params = {"symbol": symbol, "interval": "1d", "limit": BINANCE_KLINE_LIMIT}
        return self._get_json(self.BASE_URL, params, symbol)

    def _parse(self, payload: Any) -> list[PricePoint]:
        return parse_binance_klines(payload)


class OkxClient(ExchangeClient):
    """OKX v5 market candles."""

    exchange = Exchange.OKX
    BASE_URL = "https://www.okx.com/api/v5/market/candles"

    def _request(self, symbol: str) -> Any:
        params = {"instId": symbol, "bar": "1D", "limit": OKX_CANDLE_LIMIT}
        return self._get_json(self.BASE_URL, params, symbol)

    def _parse(self, payload: Any) -> list[PricePoint]:
        return parse_okx_candles(payload)


class CoinbaseClient(ExchangeClient):
    """Coinbase Exchange product candles."""

    exchange = Exchange.COINBASE
    BASE_URL = "https://api.exchange.coinbase.com/products"

    def _request(self, symbol: str) -> Any:
        url = f"{self.BASE_URL}/{symbol}/candles"
        return self._get_json(url, {"granularity": COINBASE_DAILY_GRANULARITY}, symbol)

    def _parse(self, payload: Any) -> list[PricePoint]:
        return parse_coinbase_candles(payload)


def create_exchange_client(exchange: Exchange, **kwargs: Any) -> ExchangeClient:
    """Factory function returning the client for an exchange."""
    clients: dict[Exchange, type[ExchangeClient]] = {
        Exchange.BINANCE: BinanceClient,
        Exchange.OKX: OkxClient,
        Exchange.COINBASE: CoinbaseClient,
    }
    return clients[exchange](**kwargs)
