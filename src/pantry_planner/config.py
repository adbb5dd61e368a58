"""Application configuration."""

import logging
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fuzzy_match_threshold: float = 0.4
    expiry_warning_days: int = 7
    expiry_urgent_days: int = 2
    max_parse_input_chars: int = 500
    parse_product_context_limit: int = 150
    log_level: str = "INFO"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        env_prefix="PANTRY_",
        extra="ignore",
    )


def parse_log_level(raw: str | None) -> int:
    """Map a level name from env to a logging level, defaulting to INFO."""
    if raw is None:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO
