"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ai_provider: Literal["openai", "gemini"] = "openai"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    storage_backend: Literal["file", "supabase"] = "file"
    storage_path: str = "cravesmart_storage.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "app_storage"
    session_ttl_seconds: int = 12 * 60 * 60
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
