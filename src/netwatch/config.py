"""Runtime configuration for the NetWatch services."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings read from ``NETWATCH_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="NETWATCH_", env_file=".env", env_file_encoding="utf-8"
    )

    database_url: str = Field(
        default="sqlite:///netwatch.db", description="SQLAlchemy URL of the game database"
    )
    database_echo: bool = Field(default=False, description="Log emitted SQL statements")
    hack_duration_seconds: int = Field(
        default=300, description="Estimated duration assigned to new hacks", gt=0
    )
    address_write_retries: int = Field(
        default=3,
        description="Fresh IP allocations attempted when a save hits the unique constraint",
        ge=1,
    )
    hack_poll_interval_seconds: float = Field(
        default=5.0,
        description="Real-time seconds between passes of the hack monitor",
        gt=0.0,
    )
    log_level: str = Field(default="INFO", description="Root logging level for the CLI")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
