"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Deployment secrets come from environment variables (never hardcoded)
    - The user's own API key lives in the key-value store, not here
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: a bare `uvicorn lucid.main:app` works locally
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database: local single-user app defaults to SQLite
    database_url: str = "sqlite+aiosqlite:///./lucid.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Fallback key when the user has not stored one (env API_KEY)
    api_key: str = ""

    # Providers
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    siliconflow_model: str = "deepseek-ai/DeepSeek-V3"
    provider_max_retries: int = 3
    provider_timeout_seconds: int = 120
    provider_base_delay_ms: int = 1000
    provider_max_delay_ms: int = 60_000

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
