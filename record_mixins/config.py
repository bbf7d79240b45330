"""Configuration management for record-mixins.

Uses pydantic-settings for type-safe environment variable loading.
Variables are read with the RECORD_MIXINS_ prefix.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RECORD_MIXINS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level used by the CLI",
    )

    # Dispatch behavior
    strict_resolution: bool = Field(
        default=False,
        description=(
            "Raise UnresolvedBehavior when a lazy method has no implementation "
            "for the current value and no default, instead of returning None"
        ),
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
