"""
Backtest API endpoints.
"""

from fastapi import APIRouter, Depends
from loguru import logger

from neuroquant.engine import run_backtest
from neuroquant.infrastructure.market import MarketDataService
from neuroquant.infrastructure.signals import AiSignalClient
from neuroquant.settings import Settings

from ..dependencies import get_app_settings, get_market_service
from ..schemas.api_models import BacktestRequest, BacktestResponse

router = APIRouter()


@router.post("/", response_model=BacktestResponse)
def run_backtest_endpoint(
    request: BacktestRequest,
    service: MarketDataService = Depends(get_market_service),
    settings: Settings = Depends(get_app_settings),
) -> BacktestResponse:
    """
    Run a backtest.

    Uses the posted series when given, otherwise fetches ``asset`` from
    ``exchange``. In AI mode without posted signals, signals are generated
    first when AI settings are supplied.
    """
    config = request.config.to_domain()

    is_simulation = False
    if request.series is not None:
        series = [point.to_domain() for point in request.series]
    else:
        market = service.fetch(request.asset, request.exchange)
        series, is_simulation = market.data, market.is_simulation

    signals = request.signals
    generated = None
    if config.mode.uses_external_signals and signals is None and request.ai is not None:
        client = AiSignalClient(request.ai.to_domain(), settings=settings)
        generated = [signal.to_dict() for signal in client.generate_signals(series)]
        signals = generated
        logger.info(f"Generated {len(generated)} signals for backtest")

    result = run_backtest(series, config, signals)
    return BacktestResponse(**result.to_dict(), isSimulation=is_simulation, signals=generated)
