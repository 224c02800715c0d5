"""
Market data service.

Resolves an asset on an exchange to a daily series, caching live results and
falling back to a synthetic series when the exchange cannot be used.
"""

from dataclasses import dataclass
from threading import RLock

from cachetools import TTLCache
from loguru import logger

from neuroquant.core.constants import MARKET_DATA_CACHE_SIZE, MARKET_DATA_CACHE_TTL
from neuroquant.core.enums import Asset, Exchange
from neuroquant.core.exceptions.backtest import MarketDataError, ValidationError
from neuroquant.core.models.market import PricePoint, series_to_frame
from neuroquant.infrastructure.data.ohlcv_validator import OHLCVValidator

from .exchange_clients import ExchangeClient, create_exchange_client
from .synthetic import generate_market_data


@dataclass(frozen=True)
class MarketDataResult:
    """A fetched series and whether it was simulated."""

    data: list[PricePoint]
    is_simulation: bool
    exchange: Exchange
    symbol: str

    def to_dict(self) -> dict:
        return {
            "exchange": self.exchange.value,
            "symbol": self.symbol,
            "isSimulation": self.is_simulation,
            "data": [point.to_dict() for point in self.data],
        }


class MarketDataService:
    """
    Fetch daily series with simulation fallback.

    Live series are cached per (exchange, symbol) for a few minutes. Simulated
    series are never cached, so a recovered exchange is picked up on the next call.
    """

    def __init__(
        self,
        clients: dict[Exchange, ExchangeClient] | None = None,
        validator: OHLCVValidator | None = None,
        cache_size: int = MARKET_DATA_CACHE_SIZE,
        cache_ttl: float = MARKET_DATA_CACHE_TTL,
        simulation_seed: int | None = None,
        timeout: float = 10.0,
        max_retries: int = 2,
    ) -> None:
        self._clients = clients or {
            exchange: create_exchange_client(exchange, timeout=timeout, max_retries=max_retries)
            for exchange in Exchange
        }
        self._validator = validator or OHLCVValidator()
        self._cache: TTLCache[tuple[Exchange, str], list[PricePoint]] = TTLCache(
            maxsize=cache_size, ttl=cache_ttl
        )
        self._cache_lock = RLock()
        self._simulation_seed = simulation_seed

    def fetch(self, asset: str, exchange: Exchange) -> MarketDataResult:
        """
        Get the daily series for an asset.

        Args:
            asset: Base asset code, e.g. "BTC"
            exchange: Exchange to query

        Returns:
            Live data, or a simulated series flagged with ``is_simulation``
        """
        symbol = exchange.symbol_for(asset)
        key = (exchange, symbol)

        with self._cache_lock:
            cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Market data cache hit for {exchange} {symbol}")
            return MarketDataResult(list(cached), False, exchange, symbol)

        try:
            data = self._fetch_live(exchange, symbol)
        except MarketDataError as e:
            logger.warning(f"{e}; switching to simulation")
            return self.simulate(asset, exchange)

        with self._cache_lock:
            self._cache[key] = data
        logger.info(f"Fetched {len(data)} daily bars for {exchange} {symbol}")
        return MarketDataResult(list(data), False, exchange, symbol)

    def simulate(self, asset: str, exchange: Exchange) -> MarketDataResult:
        """Build the synthetic fallback series for an asset."""
        start_price = Asset.simulation_start_price(asset)
        data = generate_market_data(start_price=start_price, seed=self._simulation_seed)
        return MarketDataResult(data, True, exchange, exchange.symbol_for(asset))

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()

    def _fetch_live(self, exchange: Exchange, symbol: str) -> list[PricePoint]:
        data = self._clients[exchange].fetch_daily(symbol)
        if not data:
            raise MarketDataError(exchange, symbol, "no data returned")
        try:
            self._validator.validate_data(series_to_frame(data))
        except ValidationError as e:
            raise MarketDataError(exchange, symbol, str(e)) from e
        return data
