"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables (12-factor app)
  - Fall back to .env file
  - Validate types and constraints at startup

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated via env_nested_delimiter="__", so NOTIFICATION__MESSAGE maps
to notification.message and HISTORY__ENABLED to history.enabled.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from railway_auth.pipeline import CONFIRMATION_MESSAGE

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class NotificationSettings(BaseModel):
    """Sign-in confirmation sent after a successful password check."""

    message: str = Field(
        default=CONFIRMATION_MESSAGE,
        min_length=1,
        description="Body of the sign-in confirmation",
    )
    failure_is_fatal: bool = Field(
        default=True,
        description="Fail authentication when the confirmation cannot be delivered",
    )


class HistorySettings(BaseModel):
    """
    Login history recording.

    The bundled recorder is in-memory, so records last only for the running
    process. A CLI invocation sees them as `history.recorded` log events.
    """

    enabled: bool = Field(default=True, description="Record successful sign-ins")


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    users_file: Path = Field(default=Path("users.json"), description="JSON list of user records")
    notification: NotificationSettings = Field(default_factory=NotificationSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept any standard logging level name, case-insensitively."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level
