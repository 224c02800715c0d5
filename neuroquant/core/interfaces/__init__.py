"""Collaborator interfaces."""

from .data import IMarketDataProvider, ISignalProvider

__all__ = ["IMarketDataProvider", "ISignalProvider"]
