"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: SecretStr | None = None
    github_api_url: str = "https://api.github.com"

    llm_backend: Literal["llmcall", "openai"] = "llmcall"
    llm_call_url: str = "http://localhost:5173/api/llmcall"
    llm_model: str = "gpt-4o-mini"
    llm_provider: str = "OpenAI"
    openai_api_key: SecretStr | None = None

    cache_ttl_seconds: float = 3600.0
    max_concurrent_fetches: int = 10
    http_timeout_seconds: float = 30.0
    template_metadata_dir: str = ".bolt"
    catalog_file: Path | None = None

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
