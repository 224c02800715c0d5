"""
FastAPI main application for the NeuroQuant backtesting platform.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from neuroquant.core.exceptions.backtest import (
    BacktestException,
    InvalidConfigError,
    ValidationError,
)
from neuroquant.core.utils.log_config import setup_logging
from neuroquant.settings import get_settings

from .routers import ai, backtest, data
from .schemas.api_models import ErrorResponse

settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    setup_logging(level=settings.log_level)
    logger.info("NeuroQuant API starting")
    yield


app = FastAPI(
    title="NeuroQuant Backtesting API",
    version="1.0.0",
    description="API for SMA/RSI and AI-signal crypto strategy backtesting",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Origin"],
)

app.include_router(backtest.router, prefix="/api/backtest", tags=["backtest"])
app.include_router(data.router, prefix="/api/data", tags=["data"])
app.include_router(ai.router, prefix="/api/ai", tags=["ai"])


@app.exception_handler(ValidationError)
async def validation_error_handler(_: Request, exc: ValidationError) -> JSONResponse:
    details = None
    if isinstance(exc, InvalidConfigError):
        details = {"field": exc.field, "constraint": exc.constraint}
    body = ErrorResponse(error=type(exc).__name__, message=str(exc), details=details)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(BacktestException)
async def backtest_error_handler(_: Request, exc: BacktestException) -> JSONResponse:
    logger.error(f"Unhandled backtest error: {exc}")
    body = ErrorResponse(error=type(exc).__name__, message=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump())


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint returning API information."""
    return {"message": "NeuroQuant Backtesting API", "version": "1.0.0", "status": "running"}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


def serve() -> None:
    """Run the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
