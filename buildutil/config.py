"""Configuration settings for buildutil.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > .env > defaults.
The trusted environment whitelist never reads .env.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from buildutil.api.constants import DEFAULT_TRUSTED_ENV_NAMES

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the BUILDUTIL_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDUTIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Environment variable names allowed into privileged build containers
    trusted_env_names: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TRUSTED_ENV_NAMES),
        description="Environment variable names that may be passed from a "
        "build definition into a privileged build container",
    )

    @field_validator("trusted_env_names")
    @classmethod
    def validate_trusted_env_names(cls, v: list[str]) -> list[str]:
        """Validate whitelist entries are non-empty and free of whitespace."""
        for name in v:
            if not name or not name.strip():
                raise ValueError("trusted_env_names entries must be non-empty")
            if any(ch.isspace() for ch in name):
                raise ValueError(
                    f"trusted_env_names entries must not contain whitespace, "
                    f"got '{name}'"
                )
        return v


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


@lru_cache(maxsize=1)
def get_trusted_env_whitelist() -> frozenset[str]:
    """Return the process-wide whitelist of trusted environment names.

    The whitelist is computed on first use and never changes afterwards for
    the lifetime of the process. Only the process environment can replace
    the default names; a ``.env`` file in the working directory is ignored.

    Returns:
        Immutable set of permitted environment variable names.
    """
    whitelist = frozenset(Settings(_env_file=None).trusted_env_names)
    logger.info("Trusted environment whitelist: %s", ", ".join(sorted(whitelist)))
    return whitelist


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = [
    "Settings",
    "get_settings",
    "get_trusted_env_whitelist",
    "print_settings_json",
]
