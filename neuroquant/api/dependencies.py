"""
Shared FastAPI dependencies.

Overridable through ``app.dependency_overrides`` so tests can swap in fakes.
"""

from functools import lru_cache

from neuroquant.infrastructure.market import MarketDataService
from neuroquant.settings import Settings, get_settings


@lru_cache(maxsize=1)
def get_market_service() -> MarketDataService:
    """Process-wide market data service, sharing one cache across requests."""
    settings = get_settings()
    return MarketDataService(timeout=settings.http_timeout, max_retries=settings.max_retries)


def get_app_settings() -> Settings:
    return get_settings()
