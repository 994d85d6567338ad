"""Core configuration.

- Centralizes environment variables (pydantic-settings) so the CLI and the
  adapters read the same contract.
- Every setting has a default: the client works with no `.env` at all.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_URL = "https://kitsu.io/api/edge"


class AppSettings(BaseSettings):
    """Central client configuration (env prefix `KITSU_`)."""

    model_config = SettingsConfigDict(
        env_prefix="KITSU_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=BASE_URL,
        min_length=8,
        description="API origin plus version prefix; every request path is appended to it.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout (seconds). None keeps the httpx default.",
    )
    user_agent: str | None = Field(
        default=None,
        min_length=1,
        description="Optional User-Agent header. No header is sent when unset.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level used by the CLI logging setup.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache()
def get_settings() -> AppSettings:
    """Default settings, read from the environment once per process.

    Invalid values raise `pydantic.ValidationError`; nothing is cached then.
    """

    return AppSettings()
