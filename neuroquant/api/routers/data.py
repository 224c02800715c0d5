"""
Data API endpoints.
"""

from fastapi import APIRouter, Depends, Query

from neuroquant.core.enums import AiProvider, Asset, Exchange
from neuroquant.infrastructure.market import MarketDataService

from ..dependencies import get_market_service
from ..schemas.api_models import AssetsResponse, MarketDataResponse

router = APIRouter()


@router.get("/assets", response_model=AssetsResponse)
def get_available_assets() -> AssetsResponse:
    """Get the supported assets, exchanges and AI providers."""
    return AssetsResponse(
        assets=[{"value": asset.value, "label": asset.label} for asset in Asset],
        exchanges=[exchange.value for exchange in Exchange],
        providers=[provider.value for provider in AiProvider],
    )


@router.get("/market", response_model=MarketDataResponse)
def get_market_data(
    asset: str = Query(default=Asset.BTC.value, min_length=1),
    exchange: Exchange = Exchange.BINANCE,
    service: MarketDataService = Depends(get_market_service),
) -> MarketDataResponse:
    """Get the daily series for an asset, simulated if the exchange is unavailable."""
    result = service.fetch(asset, exchange)
    return MarketDataResponse(**result.to_dict())
