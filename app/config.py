"""
Configuration management using pydantic-settings.
Loads environment variables with type validation.

Secrets are optional here: a missing key only fails the operation that
needs it, never application startup.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Vantage Backend"
    app_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: Optional[str] = None

    # OpenAI
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 2048
    openai_timeout_seconds: float = 60.0
    openai_max_retries: int = 2

    # JWT
    jwt_secret_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("jwt_secret_key", "jwt_secret"),
    )
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # Azure text-to-speech
    azure_tts_key: Optional[str] = None
    azure_tts_region: Optional[str] = None
    azure_tts_urdu_voice: str = "ur-PK-AsadNeural"
    azure_tts_english_voice: str = "en-US-AriaNeural"
    azure_tts_output_format: str = "audio-16khz-32kbitrate-mono-mp3"
    tts_timeout_seconds: float = 30.0

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Rate limiting
    rate_limit_enabled: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance.
    Use dependency injection in FastAPI routes.
    """
    return Settings()
