"""
HCAILT Configuration Module

This module manages application settings and environment variables using
pydantic-settings for type-safe configuration management.

Environment variables are loaded from .env file or system environment.
All provider credentials use SecretStr to prevent accidental logging.
"""

from functools import lru_cache
from typing import Literal
import logging
import re
import sys

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ALLOWED_ORIGINS = (
    "https://hcailt.awordz.com,http://localhost:5173,http://localhost:5174"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic Settings automatically reads from:
    1. Environment variables
    2. .env file in working directory
    3. Default values defined here

    Provider credentials are optional here: a deployment may only configure
    some providers. The dispatcher reports a missing credential when a
    request actually targets that provider.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars
    )

    openai_api_key: SecretStr | None = Field(
        default=None, description="OpenAI API key (chat completions)"
    )

    google_api_key: SecretStr | None = Field(
        default=None, description="Google Generative AI API key (Gemini)"
    )

    groq_api_key: SecretStr | None = Field(
        default=None, description="Groq API key (chat completions)"
    )

    fireworks_api_key: SecretStr | None = Field(
        default=None, description="Fireworks AI API key (raw HTTP inference)"
    )

    allowed_origin: str = Field(
        default=DEFAULT_ALLOWED_ORIGINS,
        description="Comma/whitespace separated list of allowed CORS origins",
    )

    fireworks_base_url: str = Field(
        default="https://api.fireworks.ai/inference/v1",
        description="Base URL of the Fireworks inference API",
    )

    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for raw HTTP provider calls",
    )

    google_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Total attempts for Google calls failing with 503/overloaded",
    )

    google_backoff_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Backoff unit; attempt N waits N * this value before retrying",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Application log level"
    )

    host: str = Field(default="0.0.0.0", description="Server bind host")

    port: int = Field(default=3000, description="Server bind port")

    debug: bool = Field(default=False, description="Enable debug mode")

    @field_validator(
        "openai_api_key",
        "google_api_key",
        "groq_api_key",
        "fireworks_api_key",
        mode="before",
    )
    @classmethod
    def blank_key_is_missing(cls, v):
        """Treat empty or whitespace-only keys as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def allowed_origins(self) -> list[str]:
        """Allowed CORS origins, in configuration order."""
        return [o.strip() for o in re.split(r"[,\s]+", self.allowed_origin) if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Returns cached settings instance.

    Using lru_cache ensures settings are loaded once and reused,
    avoiding repeated file reads and environment parsing.

    Returns:
        Settings: The application settings singleton.
    """
    return Settings()


def configure_logging(settings: Settings) -> None:
    """
    Configure application logging based on settings.

    Sets up structured logging with timestamps and reduces noise
    from third-party HTTP libraries and provider SDKs.

    Args:
        settings: The application settings instance.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("groq").setLevel(logging.WARNING)
