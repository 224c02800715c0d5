"""
AI signal provider client.

Talks to Gemini's generateContent API or any OpenAI-compatible chat
completions endpoint and turns the replies into signals or a strategy
analysis. Provider failures are logged and reported as "no signals", so a
backtest in AI mode still runs (holding throughout).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import requests
from loguru import logger

from neuroquant.core.constants import AI_TEMPERATURE
from neuroquant.core.enums import AiProvider
from neuroquant.core.exceptions.backtest import SignalProviderError, ValidationError
from neuroquant.core.interfaces.data import ISignalProvider
from neuroquant.core.models.backtest import BacktestResult, StrategyConfig
from neuroquant.core.models.market import PricePoint
from neuroquant.core.models.signal import ExternalSignal
from neuroquant.settings import Settings, get_settings

from .reply_parser import (
    AnalysisResponse,
    build_signal_prompt,
    parse_analysis_reply,
    parse_signal_reply,
)

SYSTEM_INSTRUCTION = """
You are NeuroQuant, a quantitative crypto trading system.
You receive daily OHLCV candles as CSV (date,open,high,low,close,volume).
Identify entry and exit points for a long-only strategy that is either fully
invested or fully in cash.
Reply with JSON only: an array of objects with the keys
"date" (YYYY-MM-DD, one of the input dates), "action" ("BUY" or "SELL"),
"reason" (one sentence) and "confidence" (0-100).
When asked to analyze a backtest, reply with a JSON object with the keys
"analysis" (a short paragraph) and "suggestions" (a list of strings).
""".strip()


@dataclass(frozen=True)
class AiSettings:
    """Caller-supplied provider selection and credentials."""

    provider: AiProvider = AiProvider.GEMINI
    api_key: str = ""
    model_name: str = ""
    base_url: str = ""

    @property
    def model(self) -> str:
        return self.model_name or AiProvider.default_model(self.provider)


class AiSignalClient(ISignalProvider):
    """Client for one configured AI provider."""

    def __init__(
        self,
        ai_settings: AiSettings,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.ai_settings = ai_settings
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    @property
    def provider(self) -> AiProvider:
        return self.ai_settings.provider

    def resolve_api_key(self) -> str:
        """
        Pick the API key: a server-side key wins over the caller's key.

        Raises:
            SignalProviderError: If no key is available
        """
        api_key = self.settings.api_key_for(self.provider) or self.ai_settings.api_key
        if not api_key:
            raise SignalProviderError(self.provider, "no API key provided")
        return api_key

    def resolve_base_url(self) -> str:
        """
        Pick the API base URL, without a trailing slash.

        Raises:
            SignalProviderError: If the provider has no default and none was given
        """
        base_url = self.ai_settings.base_url or AiProvider.default_base_url(self.provider)
        if not base_url:
            raise SignalProviderError(self.provider, "base URL required for custom provider")
        return base_url.rstrip("/")

    def complete(self, prompt: str) -> str | None:
        """
        Send one prompt and return the raw model text.

        Raises:
            SignalProviderError: On missing credentials, HTTP or payload errors
        """
        if self.provider.is_openai_compatible:
            return self._complete_openai(prompt)
        return self._complete_gemini(prompt)

    def generate_signals(self, series: Sequence[PricePoint]) -> list[ExternalSignal]:
        """
        Ask the model for BUY/SELL signals over the most recent bars.

        Returns:
            Parsed signals; empty when the provider fails or replies with nothing usable
        """
        prompt = build_signal_prompt(series)
        try:
            raw_text = self.complete(prompt)
            if not raw_text:
                logger.warning(f"{self.provider} returned an empty reply")
                return []
            signals = parse_signal_reply(raw_text, source=self.provider.value)
        except (SignalProviderError, ValidationError) as e:
            logger.error(f"Signal generation failed: {e}")
            return []

        logger.info(f"{self.provider} produced {len(signals)} signals")
        return signals

    def analyze_strategy(
        self, config: StrategyConfig, result: BacktestResult
    ) -> AnalysisResponse | None:
        """Ask the model to critique a finished backtest; None on failure."""
        prompt = (
            "Analyze strategy: "
            f"config={config.to_dict()} "
            f"return={result.total_return:.2f}% win_rate={result.win_rate:.2f}% "
            f"max_drawdown={result.max_drawdown:.2f}% trades={len(result.trades)}. "
            "Reply with JSON {\"analysis\": str, \"suggestions\": [str]}."
        )
        try:
            raw_text = self.complete(prompt)
            if not raw_text:
                return None
            return parse_analysis_reply(raw_text)
        except (SignalProviderError, ValidationError) as e:
            logger.error(f"Strategy analysis failed: {e}")
            return None

    def _post(self, url: str, payload: dict[str, Any], headers: dict[str, str]) -> Any:
        try:
            response = self.session.post(
                url, json=payload, headers=headers, timeout=self.settings.http_timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.JSONDecodeError as e:
            raise SignalProviderError(self.provider, f"invalid JSON response: {e}") from e
        except requests.exceptions.RequestException as e:
            raise SignalProviderError(self.provider, str(e)) from e

    def _complete_openai(self, prompt: str) -> str | None:
        payload = {
            "model": self.ai_settings.model,
            "messages": [
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt + "\n\nOutput strictly valid JSON."},
            ],
            "temperature": AI_TEMPERATURE,
            "response_format": {"type": "json_object"},
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.resolve_api_key()}",
        }
        body = self._post(f"{self.resolve_base_url()}/chat/completions", payload, headers)
        try:
            return body["choices"][0]["message"]["content"] or None
        except (KeyError, IndexError, TypeError):
            return None

    def _complete_gemini(self, prompt: str) -> str | None:
        payload = {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.resolve_api_key(),
        }
        url = f"{self.resolve_base_url()}/models/{self.ai_settings.model}:generateContent"
        body = self._post(url, payload, headers)
        try:
            return body["candidates"][0]["content"]["parts"][0]["text"] or None
        except (KeyError, IndexError, TypeError):
            return None
