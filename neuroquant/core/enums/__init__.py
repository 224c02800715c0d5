"""
Core enumerations for the backtesting platform.

This module provides centralized enumerations for domain concepts
like trading signals, strategy modes, exchanges and AI providers.
"""

from .ai_providers import AiProvider
from .exchanges import Asset, Exchange
from .signal_types import PositionState, SignalType
from .strategy_modes import StrategyMode

__all__ = ["SignalType", "PositionState", "StrategyMode", "Exchange", "Asset", "AiProvider"]
