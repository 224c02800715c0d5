"""
Market data collaborators.

Exchange clients, the synthetic fallback generator and the service that
combines them.
"""

from .exchange_clients import (
    BinanceClient,
    CoinbaseClient,
    ExchangeClient,
    OkxClient,
    create_exchange_client,
)
from .market_service import MarketDataResult, MarketDataService
from .synthetic import generate_market_data

__all__ = [
    "ExchangeClient",
    "BinanceClient",
    "OkxClient",
    "CoinbaseClient",
    "create_exchange_client",
    "MarketDataService",
    "MarketDataResult",
    "generate_market_data",
]
