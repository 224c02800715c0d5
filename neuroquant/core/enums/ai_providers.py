"""
AI provider enumerations.

This module defines the LLM providers that can generate trading signals.
"""

from enum import StrEnum


class AiProvider(StrEnum):
    """
    Supported AI signal providers.

    GEMINI uses Google's generateContent API; the others speak the
    OpenAI-compatible chat completions protocol.
    """

    GEMINI = "GEMINI"
    DEEPSEEK = "DEEPSEEK"
    OPENAI = "OPENAI"
    CUSTOM = "CUSTOM"

    @property
    def is_openai_compatible(self) -> bool:
        """Check if the provider speaks the chat completions protocol."""
        return self != self.GEMINI

    @property
    def api_key_env_var(self) -> str:
        """Environment variable holding a server-side key for this provider."""
        return f"{self.value}_API_KEY"

    @classmethod
    def default_model(cls, provider: "AiProvider") -> str:
        """
        Get the default model name for a provider.

        Args:
            provider: AI provider enum value

        Returns:
            Model identifier
        """
        models = {
            cls.GEMINI: "gemini-2.5-flash",
            cls.DEEPSEEK: "deepseek-chat",
            cls.OPENAI: "gpt-4o",
            cls.CUSTOM: "gpt-4o",
        }
        return models[provider]

    @classmethod
    def default_base_url(cls, provider: "AiProvider") -> str | None:
        """
        Get the default API base URL for a provider.

        Args:
            provider: AI provider enum value

        Returns:
            Base URL, or None when the caller must supply one
        """
        urls = {
            cls.GEMINI: "https://generativelanguage.googleapis.com/v1beta",
            cls.DEEPSEEK: "https://api.deepseek.com",
            cls.OPENAI: "https://api.openai.com/v1",
        }
        return urls.get(provider)
