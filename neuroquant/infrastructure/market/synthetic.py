"""
Synthetic market data.

Geometric random walk used when no exchange can be reached.
"""

from datetime import date, timedelta

import numpy as np

from neuroquant.core.constants import (
    SIMULATION_DAYS,
    SIMULATION_DRIFT,
    SIMULATION_MIN_PRICE,
    SIMULATION_MIN_VOLUME,
    SIMULATION_PRICE_DECIMALS,
    SIMULATION_VOLATILITY,
    SIMULATION_VOLUME_RANGE,
    SIMULATION_WICK_RANGE,
)
from neuroquant.core.models.market import PricePoint


def generate_market_data(
    days: int = SIMULATION_DAYS,
    start_price: float = 100.0,
    end_date: date | None = None,
    seed: int | None = None,
) -> list[PricePoint]:
    """
    Generate a daily random-walk series.

    Each day opens at the previous close and moves by
    ``price * (drift + volatility * N(0, 1))``; highs and lows extend up to 2%
    beyond the open/close.

    Args:
        days: Number of bars
        start_price: Open of the first bar
        end_date: Day after the last bar; defaults to today
        seed: Seed for reproducible series

    Returns:
        Chronological bars ending the day before ``end_date``
    """
    rng = np.random.default_rng(seed)
    first_day = (end_date or date.today()) - timedelta(days=days)
    decimals = SIMULATION_PRICE_DECIMALS

    series: list[PricePoint] = []
    current_price = start_price
    for i in range(days):
        change = current_price * (SIMULATION_DRIFT + SIMULATION_VOLATILITY * rng.standard_normal())
        close = max(SIMULATION_MIN_PRICE, current_price + change)
        open_price = current_price
        high = max(open_price, close) * (1 + rng.random() * SIMULATION_WICK_RANGE)
        low = min(open_price, close) * (1 - rng.random() * SIMULATION_WICK_RANGE)
        volume = int(rng.integers(0, SIMULATION_VOLUME_RANGE)) + SIMULATION_MIN_VOLUME

        series.append(
            PricePoint(
                date=first_day + timedelta(days=i),
                open=round(open_price, decimals),
                high=round(high, decimals),
                low=round(low, decimals),
                close=round(close, decimals),
                volume=float(volume),
            )
        )
        current_price = close

    return series
