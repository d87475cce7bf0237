from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Backend credentials
    # One secret per backend. Empty string means "not configured": the server
    # still starts, and only turns dispatched to that backend fail.
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    gemini_api_key: str = ""

    # Model overrides (labels shown in the UI stay fixed in the registry)
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-3-5-sonnet-latest"
    gemini_model: str = "gemini-1.5-flash"

    # Optional OpenAI-compatible endpoint (e.g. a proxy). None = api.openai.com
    openai_base_url: str | None = None

    # Generation parameters shared by every backend
    temperature: float = 0.8
    max_output_tokens: int = 500

    # Upper bound for a single backend call, in seconds
    request_timeout_seconds: float = 60.0

    # HTTP server
    cors_origins: list[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def credentials_for(self, provider_key: str) -> str | None:
        """Secret configured for a backend, or None when unset/blank."""
        value = getattr(self, f"{provider_key}_api_key", "") or ""
        return value.strip() or None

    def model_for(self, provider_key: str, default: str) -> str:
        """Model id configured for a backend, falling back to the registry default."""
        value = getattr(self, f"{provider_key}_model", "") or ""
        return value.strip() or default


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
