"""Configuration for the secret-token command-line tool."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SecretTokenSettings(BaseSettings):
    """Top-level configuration container for the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="SECRET_TOKEN_",
        env_file=".env",
        extra="ignore",
    )

    source_env: str = Field(
        default="API_KEY",
        min_length=1,
        description="Environment variable the `env` command reads the secret-token URI from.",
    )
    log_level: str = Field(default="WARNING", description="Root logger level.")
    reveal: bool = Field(
        default=False,
        description="If true, the `env` command prints the URI and decoded token unmasked.",
    )

    config_path: Path | None = Field(
        default=None,
        description="Resolved path used to load configuration (for diagnostics).",
        exclude=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level == "TRACE":
            return "DEBUG"
        if level not in ALLOWED_LOG_LEVELS:
            print(
                f"[secret-token] Unsupported log level '{value}'. "
                f"Falling back to WARNING. Valid values: {', '.join(ALLOWED_LOG_LEVELS)}.",
                file=sys.stderr,
                flush=True,
            )
            return "WARNING"
        return level


def load_settings(config_path: Path | None = None, overrides: dict[str, Any] | None = None) -> SecretTokenSettings:
    """Build CLI settings from an optional YAML mapping plus command-line overrides.

    Keys absent from both are read from `SECRET_TOKEN_*` variables or `.env`.
    """

    base_data: dict[str, Any] = {}
    resolved_path: Path | None = None
    if config_path:
        resolved_path = Path(config_path).expanduser().resolve()
        if not resolved_path.exists():
            raise ConfigurationError(f"Configuration file not found: {resolved_path}")
        try:
            with resolved_path.open("r", encoding="utf-8") as handle:
                base_data = yaml.safe_load(handle.read()) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Unable to parse configuration file {resolved_path}: {exc}") from exc
        if not isinstance(base_data, dict):
            raise ConfigurationError(f"Configuration file {resolved_path} must contain a mapping")
    if overrides:
        base_data.update(overrides)

    settings = SecretTokenSettings(**base_data)
    settings.config_path = resolved_path
    return settings
