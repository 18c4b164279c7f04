"""Configuration management for termshell."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from termshell.core.models import DEFAULT_USER, DEFAULT_WORKING_DIRECTORY, WRAP_WIDTH
from termshell.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Session settings, read from ``TERMSHELL_*`` variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="TERMSHELL_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Prompt
    user: str = Field(default=DEFAULT_USER, description="User shown in the prompt")
    working_directory: str = Field(
        default=DEFAULT_WORKING_DIRECTORY,
        description="Directory label shown in the prompt",
    )

    # Rendering
    wrap_width: int = Field(default=WRAP_WIDTH, ge=1, description="Wrap width for structured results")
    clear_on_start: bool = Field(default=True, description="Clear the screen when a session starts")

    # Handler
    handler_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds before a handler call is reported as timed out",
    )
    handler_errors: Literal["report", "raise"] = Field(
        default="report",
        description="What to do when the handler raises",
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Log level")


def get_settings(**overrides: Any) -> Settings:
    """Load settings, applying *overrides* on top of the environment.

    ``None`` overrides are ignored so unset CLI flags fall through to the
    environment.

    Raises
    ------
    ConfigurationError
        When a value fails validation.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid settings: {exc.error_count()} error(s)",
            hint=str(exc),
        ) from exc
