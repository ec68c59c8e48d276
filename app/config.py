"""
Configuration management for the Health Literacy Translator.

Uses Pydantic Settings for type-safe environment variable handling.
All configuration is loaded from environment variables or .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ==========================================================================
    # Application
    # ==========================================================================
    app_name: str = "Health Literacy Translator"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # Server
    # ==========================================================================
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: str = "*"
    max_request_bytes: int = 1024 * 1024

    # ==========================================================================
    # Model Backend (OpenRouter-compatible chat completions)
    # ==========================================================================
    openrouter_api_key: str = ""
    openrouter_model: str = "openai/gpt-4o-mini"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_site: str = ""
    openrouter_app: str = "Health Literacy Translator"
    llm_temperature: float = 0.3

    # ==========================================================================
    # Remote Translation (used by /simplify when use_ai is set)
    # ==========================================================================
    ai_endpoint: str = "http://localhost:3000/translate"

    # ==========================================================================
    # Rate Limiting
    # ==========================================================================
    rate_limit_per_minute: int = 30

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @property
    def allowed_origins(self) -> list[str]:
        """List of allowed CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience access
settings = get_settings()
