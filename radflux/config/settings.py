"""Configuration models using Pydantic."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DispatcherSettings(BaseSettings):
    """Global dispatcher configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="RADFLUX_",
        case_sensitive=False,
        validate_assignment=True,
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        pattern="^(json|plain)$",
        description="Log format (json, plain)"
    )

    # Dispatch behaviour
    warn_unknown_actions: bool = Field(
        default=True,
        description="Log a warning when an undeclared action is called or published"
    )
    max_subscribers_warning: int = Field(
        default=100,
        ge=1,
        description="Subscriber count per action above which a warning is logged"
    )

    # Metrics configuration
    metrics_enabled: bool = Field(
        default=True,
        description="Record Prometheus counters for calls and publishes"
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
