"""
AI API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from neuroquant.engine import run_backtest
from neuroquant.infrastructure.signals import AiSignalClient
from neuroquant.settings import Settings

from ..dependencies import get_app_settings
from ..schemas.api_models import (
    AnalysisRequest,
    AnalysisResponseModel,
    SignalsRequest,
    SignalsResponse,
)

router = APIRouter()


@router.post("/signals", response_model=SignalsResponse)
def generate_signals(
    request: SignalsRequest, settings: Settings = Depends(get_app_settings)
) -> SignalsResponse:
    """Generate BUY/SELL signals; an empty list when the provider fails."""
    client = AiSignalClient(request.ai.to_domain(), settings=settings)
    series = [point.to_domain() for point in request.series]
    return SignalsResponse(signals=[signal.to_dict() for signal in client.generate_signals(series)])


@router.post("/analyze", response_model=AnalysisResponseModel)
def analyze_strategy(
    request: AnalysisRequest, settings: Settings = Depends(get_app_settings)
) -> AnalysisResponseModel:
    """Run the backtest and ask the model to critique it."""
    config = request.config.to_domain()
    result = run_backtest([point.to_domain() for point in request.series], config, request.signals)

    client = AiSignalClient(request.ai.to_domain(), settings=settings)
    analysis = client.analyze_strategy(config, result)
    if analysis is None:
        raise HTTPException(status_code=502, detail="AI provider returned no analysis")
    return AnalysisResponseModel(**analysis.to_dict())
