"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_base_url: str = "https://api.openai.com/v1"
    openai_timeout_seconds: float = 45.0
    default_model: str = "gpt-4.1-nano"
    secret_namespace: str = "com.freshkeeper.openai"
    image_max_dimension: int = 1024
    image_jpeg_quality: int = 70
    image_max_bytes: int = 20_000_000
    recent_recipe_limit: int = 5
    photo_bucket: str = "food-photos"
    timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
