"""Runtime settings for the embed service, read from the environment and `.env`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

Strategy = Literal["static", "rendered", "snaptik"]
Layout = Literal["stats", "creator"]


class Settings(BaseSettings):
    """Typed configuration for one deployed instance."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        validate_default=True,
        populate_by_name=True,
    )

    host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("EMBEDGEN_HOST", "HOST"))
    port: int = Field(default=3000, ge=1, le=65535, validation_alias=AliasChoices("EMBEDGEN_PORT", "PORT"))

    strategy: Strategy = Field(default="static", validation_alias="EMBEDGEN_STRATEGY")
    layout: Layout = Field(default="stats", validation_alias="EMBEDGEN_LAYOUT")
    allow_youtube: bool = Field(default=False, validation_alias="EMBEDGEN_ALLOW_YOUTUBE")

    request_timeout: float = Field(default=15.0, gt=0, validation_alias="EMBEDGEN_REQUEST_TIMEOUT")
    browser_timeout_ms: int = Field(default=30_000, ge=1000, validation_alias="EMBEDGEN_BROWSER_TIMEOUT_MS")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, validation_alias="EMBEDGEN_USER_AGENT")
    snaptik_base_url: str = Field(default="https://snaptik.app", validation_alias="EMBEDGEN_SNAPTIK_BASE_URL")

    log_level: str = Field(default="INFO", validation_alias="EMBEDGEN_LOG_LEVEL")
    log_json: bool = Field(default=False, validation_alias="EMBEDGEN_LOG_JSON")

    @field_validator("snaptik_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="after")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_settings(env_path: Path | None = None, **overrides) -> Settings:
    """Load settings from `.env`/environment, applying explicit overrides last."""
    if env_path is not None:
        load_dotenv(env_path, override=False)
    else:
        load_dotenv(override=False)

    try:
        settings = Settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    LOGGER.debug(
        "Settings loaded",
        extra={"event": "config.loaded", "strategy": settings.strategy, "layout": settings.layout},
    )
    return settings
