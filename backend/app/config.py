"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden by a CONTACTS_* environment variable
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for every setting: `uvicorn app.main:app` works with no .env
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CONTACTS_", case_sensitive=False,
    )

    # Storage: relative paths resolve against the process working directory
    contacts_file: str = "contacts.json"

    # Export
    export_work_dir: str | None = None  # None → system temp dir
    export_compression_level: int = Field(9, ge=0, le=9)

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
