"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - The storage key comes from the environment (never hardcoded)
    - data_root is always absolute once validated
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Settings is passed explicitly to create_app(): tests build isolated apps
      without touching the cached instance
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    data_root: Path = Field(default=Path("."), validate_default=True)
    atomic_writes: bool = True
    serialize_writes: bool = True

    @field_validator("data_root", mode="after")
    @classmethod
    def resolve_data_root(cls, v: Path) -> Path:
        """Relative roots are anchored at the working directory at startup."""
        return v.expanduser().resolve()

    # Access control: empty means writes are open
    storage_key: str = ""

    # API
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]
    max_body_bytes: int = 1024 * 1024

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
