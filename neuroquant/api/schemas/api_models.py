"""
Pydantic schemas for API request/response models.
"""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from neuroquant.core.constants import (
    DEFAULT_INITIAL_CAPITAL,
    DEFAULT_LONG_WINDOW,
    DEFAULT_RSI_OVERBOUGHT,
    DEFAULT_RSI_OVERSOLD,
    DEFAULT_RSI_PERIOD,
    DEFAULT_SHORT_WINDOW,
)
from neuroquant.core.enums import AiProvider, Exchange, StrategyMode
from neuroquant.core.models.backtest import StrategyConfig
from neuroquant.core.models.market import PricePoint
from neuroquant.infrastructure.signals import AiSettings


class CamelModel(BaseModel):
    """Accepts both camelCase (browser) and snake_case field names."""

    model_config = ConfigDict(populate_by_name=True)


class PricePointModel(CamelModel):
    """One daily OHLCV bar."""

    date: dt.date
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(default=0.0, ge=0)

    def to_domain(self) -> PricePoint:
        return PricePoint(
            date=self.date,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )


class StrategyConfigModel(CamelModel):
    """Strategy configuration; range checks happen in the engine."""

    mode: StrategyMode = StrategyMode.ALGO
    initial_capital: float = Field(default=DEFAULT_INITIAL_CAPITAL, alias="initialCapital")
    short_window: int = Field(default=DEFAULT_SHORT_WINDOW, alias="shortWindow")
    long_window: int = Field(default=DEFAULT_LONG_WINDOW, alias="longWindow")
    rsi_period: int = Field(default=DEFAULT_RSI_PERIOD, alias="rsiPeriod")
    rsi_overbought: float = Field(default=DEFAULT_RSI_OVERBOUGHT, alias="rsiOverbought")
    rsi_oversold: float = Field(default=DEFAULT_RSI_OVERSOLD, alias="rsiOversold")
    use_rsi_filter: bool = Field(default=False, alias="useRsiFilter")

    def to_domain(self) -> StrategyConfig:
        return StrategyConfig(
            mode=self.mode,
            initial_capital=self.initial_capital,
            short_window=self.short_window,
            long_window=self.long_window,
            rsi_period=self.rsi_period,
            rsi_overbought=self.rsi_overbought,
            rsi_oversold=self.rsi_oversold,
            use_rsi_filter=self.use_rsi_filter,
        )


class AiSettingsModel(CamelModel):
    """Provider selection sent by the client."""

    provider: AiProvider = AiProvider.GEMINI
    api_key: str = Field(default="", alias="apiKey")
    model_name: str = Field(default="", alias="modelName")
    base_url: str = Field(default="", alias="baseUrl")

    def to_domain(self) -> AiSettings:
        return AiSettings(
            provider=self.provider,
            api_key=self.api_key,
            model_name=self.model_name,
            base_url=self.base_url,
        )


class BacktestRequest(CamelModel):
    """
    Request model for a backtest run.

    Without ``series`` the data is fetched for ``asset`` on ``exchange``.
    In AI mode without ``signals``, signals are generated with ``ai`` settings.
    Signals are passed through raw; malformed entries are skipped by the engine.
    """

    config: StrategyConfigModel = Field(default_factory=StrategyConfigModel)
    series: list[PricePointModel] | None = None
    asset: str = "BTC"
    exchange: Exchange = Exchange.BINANCE
    signals: list[dict[str, Any]] | None = None
    ai: AiSettingsModel | None = None


class BacktestResponse(BaseModel):
    """Response model for a backtest run."""

    trades: list[dict[str, Any]]
    finalBalance: float
    totalReturn: float
    winRate: float
    maxDrawdown: float
    history: list[dict[str, Any]]
    isSimulation: bool = False
    signals: list[dict[str, Any]] | None = None


class MarketDataResponse(BaseModel):
    """Response model for a daily series."""

    exchange: Exchange
    symbol: str
    isSimulation: bool
    data: list[dict[str, Any]]


class SignalsRequest(CamelModel):
    """Request model for AI signal generation."""

    series: list[PricePointModel] = Field(..., min_length=1)
    ai: AiSettingsModel = Field(default_factory=AiSettingsModel)


class SignalsResponse(BaseModel):
    """Response model for generated signals."""

    signals: list[dict[str, Any]]


class AnalysisRequest(CamelModel):
    """Request model for AI strategy analysis; the backtest is re-run from the series."""

    config: StrategyConfigModel = Field(default_factory=StrategyConfigModel)
    series: list[PricePointModel] = Field(..., min_length=1)
    signals: list[dict[str, Any]] | None = None
    ai: AiSettingsModel = Field(default_factory=AiSettingsModel)


class AssetsResponse(BaseModel):
    """Response model for supported assets, exchanges and providers."""

    assets: list[dict[str, str]]
    exchanges: list[str]
    providers: list[str]


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str
    message: str
    details: dict | None = None


class AnalysisResponseModel(BaseModel):
    """Response model for AI strategy analysis."""

    analysis: str
    suggestions: list[str]
