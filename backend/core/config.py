"""Application configuration."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from the environment or a local .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "microfeed"
    app_env: str = "local"
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./microfeed.db"
    sql_echo: bool = False

    # Account rules
    password_min_length: int = Field(default=6, ge=1)
    name_max_length: int = Field(default=50, ge=1)
    micropost_max_length: int = Field(default=140, ge=1)

    # Listings
    users_per_page: int = Field(default=30, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    # Session cookie
    remember_cookie_max_age_days: int = 20 * 365
    allow_insecure_http_cookies: bool = False

    # Rate limiting
    redis_url: str = "redis://localhost:6379/0"
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60

    cors_origins: list[str] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def is_local(self) -> bool:
        return self.app_env.strip().lower() in {"local", "test"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
