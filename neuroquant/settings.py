"""Application settings powered by pydantic-settings.

| Variable                 | Default                  | Purpose                                  |
|--------------------------|--------------------------|------------------------------------------|
| `NEUROQUANT_LOG_LEVEL`   | `INFO`                   | Loguru sink level                        |
| `NEUROQUANT_HTTP_TIMEOUT`| `10.0`                   | Seconds per exchange / AI request        |
| `NEUROQUANT_MAX_RETRIES` | `2`                      | Exchange fetch attempts before fallback  |
| `NEUROQUANT_CORS_ORIGINS`| localhost dev origins    | Allowed browser origins for the API      |
| `GEMINI_API_KEY`         | `None`                   | Server-side key, overrides client keys   |
| `DEEPSEEK_API_KEY`       | `None`                   | Server-side key, overrides client keys   |
| `OPENAI_API_KEY`         | `None`                   | Server-side key, overrides client keys   |
| `CUSTOM_API_KEY`         | `None`                   | Server-side key, overrides client keys   |
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from neuroquant.core.enums import AiProvider


class Settings(BaseSettings):
    """Environment configuration for the collaborators around the engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    host: str = Field(default="127.0.0.1", alias="NEUROQUANT_HOST")
    port: int = Field(default=8000, gt=0, alias="NEUROQUANT_PORT")
    log_level: str = Field(default="INFO", alias="NEUROQUANT_LOG_LEVEL")
    http_timeout: float = Field(default=10.0, gt=0, alias="NEUROQUANT_HTTP_TIMEOUT")
    max_retries: int = Field(default=2, ge=1, alias="NEUROQUANT_MAX_RETRIES")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        alias="NEUROQUANT_CORS_ORIGINS",
    )
    user_agent: str = Field(default="neuroquant/1.0", alias="NEUROQUANT_USER_AGENT")

    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    deepseek_api_key: str | None = Field(default=None, alias="DEEPSEEK_API_KEY")
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    custom_api_key: str | None = Field(default=None, alias="CUSTOM_API_KEY")

    def api_key_for(self, provider: AiProvider) -> str | None:
        """Server-side key for a provider, if one is configured."""
        keys = {
            AiProvider.GEMINI: self.gemini_api_key,
            AiProvider.DEEPSEEK: self.deepseek_api_key,
            AiProvider.OPENAI: self.openai_api_key,
            AiProvider.CUSTOM: self.custom_api_key,
        }
        return keys[provider] or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once from the environment."""
    return Settings()
