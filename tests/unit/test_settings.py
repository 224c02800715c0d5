"""
Unit tests for environment settings.
"""

import pytest

from neuroquant.core.enums import AiProvider
from neuroquant.settings import Settings


class TestSettings:
    """Test suite for Settings."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for provider in AiProvider:
            monkeypatch.delenv(provider.api_key_env_var, raising=False)
        for name in ("LOG_LEVEL", "HTTP_TIMEOUT", "MAX_RETRIES", "CORS_ORIGINS"):
            monkeypatch.delenv(f"NEUROQUANT_{name}", raising=False)

    def test_should_use_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.http_timeout == 10.0
        assert settings.max_retries == 2
        assert settings.api_key_for(AiProvider.GEMINI) is None

    def test_should_read_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEUROQUANT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("NEUROQUANT_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("NEUROQUANT_CORS_ORIGINS", '["https://app.example.com"]')
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-server")

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.http_timeout == 2.5
        assert settings.cors_origins == ["https://app.example.com"]
        assert settings.api_key_for(AiProvider.DEEPSEEK) == "sk-server"
        assert settings.api_key_for(AiProvider.OPENAI) is None

    def test_should_treat_blank_keys_as_missing(self) -> None:
        assert Settings(_env_file=None, GEMINI_API_KEY="").api_key_for(AiProvider.GEMINI) is None

    def test_should_reject_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEUROQUANT_HTTP_TIMEOUT", "0")
        with pytest.raises(ValueError):
            Settings(_env_file=None)
