"""
Shared fixtures for the test suite.
"""

from collections.abc import Callable, Sequence
from datetime import date, timedelta

import pytest

from neuroquant.core.models.market import PricePoint


def build_series(closes: Sequence[float], start: date = date(2024, 1, 1)) -> list[PricePoint]:
    """Flat bars (open=high=low=close) on consecutive days."""
    return [
        PricePoint(
            date=start + timedelta(days=i),
            open=close,
            high=close,
            low=close,
            close=close,
            volume=1000.0,
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def series_factory() -> Callable[..., list[PricePoint]]:
    """Factory for daily series built from closing prices."""
    return build_series
