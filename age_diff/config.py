"""Runtime configuration for the age_diff package.

Settings are loaded in priority order:
  1. Environment variables (highest priority)
  2. .env file in the project root
  3. Field defaults

Usage::

    from age_diff.config import settings

    print(settings.output_dir)
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
        populate_by_name=True,
    )

    host: str = Field("0.0.0.0", alias="HOST", description="Interface the HTTP API binds to.")
    port: int = Field(4000, alias="PORT", ge=0, le=65535, description="HTTP API port.")
    output_dir: Path = Field(
        Path("./output"),
        alias="OUTPUT_DIR",
        description="Directory the age_summary.txt report is written to.",
    )
    rate_limit_requests: int = Field(
        60,
        alias="RATE_LIMIT_REQUESTS",
        ge=1,
        description="Requests allowed per client within one rate-limit window.",
    )
    rate_limit_window_seconds: float = Field(
        60.0,
        alias="RATE_LIMIT_WINDOW_SECONDS",
        gt=0,
        description="Length of the sliding rate-limit window.",
    )
    log_format: Literal["text", "json"] = Field(
        "text",
        alias="LOG_FORMAT",
        description="'json' for structured log lines, 'text' for plaintext.",
    )


def get_settings() -> Settings:
    """Build a fresh ``Settings`` from the current environment."""
    return Settings()


settings = Settings()
