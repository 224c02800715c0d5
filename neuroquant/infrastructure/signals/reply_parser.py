"""
Parsing of LLM replies into trading signals.
"""

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from neuroquant.core.constants import AI_DEFAULT_CONFIDENCE, AI_PROMPT_BARS
from neuroquant.core.enums import SignalType
from neuroquant.core.exceptions.backtest import ValidationError
from neuroquant.core.models.market import PricePoint
from neuroquant.core.models.signal import ExternalSignal
from neuroquant.core.utils.validation import parse_calendar_day

_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass(frozen=True)
class AnalysisResponse:
    """Free-text strategy critique returned by a provider."""

    analysis: str
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"analysis": self.analysis, "suggestions": list(self.suggestions)}


def build_signal_prompt(series: Sequence[PricePoint], bars: int = AI_PROMPT_BARS) -> str:
    """Render the most recent bars as CSV for the model."""
    recent = list(series)[-bars:]
    rows = "\n".join(
        f"{p.date.isoformat()},{p.open},{p.high},{p.low},{p.close},{p.volume}" for p in recent
    )
    return f"Input Data (CSV):\n{rows}\nOutput: JSON array of signals."


def clean_model_output(text: str) -> str:
    """Strip markdown code fences around a JSON reply."""
    return _FENCE_PATTERN.sub("", text).strip()


def load_json_reply(text: str) -> Any:
    """
    Decode a model reply as JSON.

    Raises:
        ValidationError: If the reply is not valid JSON
    """
    try:
        return json.loads(clean_model_output(text))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Model reply is not valid JSON: {e}") from e


def parse_signal_reply(text: str, source: str | None = None) -> list[ExternalSignal]:
    """
    Convert a model reply into signals.

    The reply may be a JSON array or an object with a ``signals`` array.
    Entries with an unreadable date, or an action other than BUY/SELL, are
    dropped with a warning.

    Args:
        text: Raw model output
        source: Provider name recorded on every signal

    Returns:
        Parsed signals in reply order

    Raises:
        ValidationError: If the reply is not JSON or holds no signal array
    """
    payload = load_json_reply(text)
    if isinstance(payload, dict):
        payload = payload.get("signals")
    if not isinstance(payload, list):
        raise ValidationError("Model reply does not contain a signal array")

    signals: list[ExternalSignal] = []
    for entry in payload:
        if not isinstance(entry, dict):
            logger.warning(f"Dropping signal that is not an object: {entry!r}")
            continue
        try:
            signals.append(_signal_from_entry(entry, source))
        except (ValidationError, ValueError, TypeError, KeyError) as e:
            logger.warning(f"Dropping unusable signal {entry!r}: {e}")
    return signals


def _signal_from_entry(entry: dict[str, Any], source: str | None) -> ExternalSignal:
    confidence = entry.get("confidence")
    return ExternalSignal(
        date=parse_calendar_day(entry["date"]),
        action=SignalType.from_token(entry["action"]),
        reason=str(entry.get("reason") or ""),
        confidence=float(confidence) if confidence else AI_DEFAULT_CONFIDENCE,
        strategy_source=source,
    )


def parse_analysis_reply(text: str) -> AnalysisResponse:
    """
    Convert a model reply into an AnalysisResponse.

    Raises:
        ValidationError: If the reply is not a JSON object with an analysis
    """
    payload = load_json_reply(text)
    if not isinstance(payload, dict) or "analysis" not in payload:
        raise ValidationError("Model reply does not contain an analysis")
    suggestions = payload.get("suggestions") or []
    return AnalysisResponse(
        analysis=str(payload["analysis"]),
        suggestions=[str(item) for item in suggestions],
    )
