"""
Configuration management for pentascore.

Uses Pydantic Settings to load configuration from environment variables
with defaults taken from the UIPM rules. Every value can be overridden
with a ``PENTASCORE_`` prefixed environment variable or a .env file.

Usage:
    from pentascore.config import settings
    print(settings.handicap_pack_start_threshold_seconds)
"""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can be set directly or via a .env file
    in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="PENTASCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Laser Run Handicap Start
    # ==========================================================================

    # Athletes further behind the leader than this start together in the pack
    handicap_pack_start_threshold_seconds: int = Field(
        default=90,
        description="Raw delay (seconds) above which an athlete joins the pack start",
    )
    handicap_pack_start_time_seconds: int = Field(
        default=90,
        description="Start delay (seconds) given to every pack starter (1:30)",
    )
    handicap_pack_gate: str = Field(
        default="A",
        description="Gate label used for pack starters, who have no staggered gate",
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="console",
        description="Log format: 'console' for concise lines, 'verbose' for debugging",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Ensure log format is one we know how to render."""
        lower_v = v.lower()
        if lower_v not in {"console", "verbose"}:
            raise ValueError("log_format must be 'console' or 'verbose'")
        return lower_v

    @field_validator(
        "handicap_pack_start_threshold_seconds",
        "handicap_pack_start_time_seconds",
    )
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("handicap delays must be non-negative")
        return v

    @model_validator(mode="after")
    def validate_pack_time(self) -> "Settings":
        """The pack cannot start earlier than the last staggered starter."""
        if self.handicap_pack_start_time_seconds < self.handicap_pack_start_threshold_seconds:
            raise ValueError(
                "handicap_pack_start_time_seconds must be >= "
                "handicap_pack_start_threshold_seconds"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only read the environment once per process.
    """
    return Settings()


# Convenience alias for importing
settings = get_settings()
