"""
AI signal collaborators.
"""

from .ai_client import AiSettings, AiSignalClient
from .reply_parser import AnalysisResponse, parse_analysis_reply, parse_signal_reply

__all__ = [
    "AiSettings",
    "AiSignalClient",
    "AnalysisResponse",
    "parse_signal_reply",
    "parse_analysis_reply",
]
