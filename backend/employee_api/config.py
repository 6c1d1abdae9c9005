"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - upstream_max_attempts counts total attempts (first call included), never below 1

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box against the local mock upstream
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Upstream employee API
    employee_api_url: str = "http://localhost:8112/api/v1/employee"

    @field_validator("employee_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """GET {base}/{id} is built by concatenation; a trailing slash would double up."""
        return v.rstrip("/")

    upstream_max_attempts: int = Field(3, ge=1)
    upstream_base_delay_ms: int = Field(1000, ge=0)
    upstream_backoff_multiplier: float = Field(2.0, ge=1.0)
    upstream_max_delay_ms: int = Field(60_000, ge=0)
    upstream_timeout_seconds: float = Field(30.0, gt=0)

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
