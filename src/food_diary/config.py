"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str
    token_store_path: str = ".food_diary/storage.json"
    token_key: str = "token"
    request_timeout_seconds: float = 10.0
    analysis_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str) -> str:
    """Strip whitespace and trailing slashes from the API base URL."""
    cleaned = raw.strip().rstrip("/")
    if not cleaned:
        raise ValueError("API base URL must not be empty")
    return cleaned
