"""
Collaborator interfaces.

The engine only consumes a materialised series and a resolved signal list;
these interfaces describe the components that produce them.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from neuroquant.core.models.market import PricePoint
from neuroquant.core.models.signal import ExternalSignal


class IMarketDataProvider(ABC):
    """Abstract interface for daily OHLCV sources."""

    @abstractmethod
    def fetch_daily(self, symbol: str) -> list[PricePoint]:
        """Fetch chronological daily bars for an exchange symbol."""
        pass


class ISignalProvider(ABC):
    """Abstract interface for external trading signal sources."""

    @abstractmethod
    def generate_signals(self, series: Sequence[PricePoint]) -> list[ExternalSignal]:
        """Produce dated BUY/SELL decisions for a series."""
        pass
