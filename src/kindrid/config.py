"""Application configuration."""

import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "development")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "port"))
    host: str = Field(
        default="0.0.0.0", validation_alias=AliasChoices("HOST", "host")
    )
    environment: str = Field(
        default=_ENVIRONMENT,
        validation_alias=AliasChoices("ENVIRONMENT", "environment"),
    )
    railway_environment: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RAILWAY_ENVIRONMENT", "railway_environment"),
    )
    log_level: str = "INFO"
    static_dir: str = "dist"
    public_dir: str = "public"
    state_dir: str | None = "data"
    seed_demo_photos: bool = True
    analysis_delay_seconds: float = 0.8
    removal_delay_seconds: float = 1.5
    random_seed: int | None = None
    startup_probe_delay_seconds: float = 2.0
    probe_retry_delay_seconds: float = 3.0

    model_config = SettingsConfigDict(
        env_prefix="KINDRID_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
        populate_by_name=True,
    )


def parse_names(raw: str | None) -> list[str]:
    """Parse comma-separated child names, dropping blanks and repeats."""
    if raw is None:
        return []
    names: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in names:
            names.append(value)
    return names
