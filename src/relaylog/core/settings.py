"""
Configuration models for relaylog using Pydantic v2 Settings.

Every field can be set from the environment with the ``RELAYLOG_`` prefix and
``__`` between nested groups, e.g. ``RELAYLOG_REMOTE__ENDPOINT``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .levels import Level, parse_level
from .presets import get_preset_level

LevelName = Literal["TRACE", "DEBUG", "INFO", "WARN", "WARNING", "ERROR", "FATAL"]


class CoreSettings(BaseModel):
    """Facade-wide settings."""

    app_name: str = Field(default="relaylog", description="Logical application name")
    default_category: str = Field(
        default="relaylog",
        description="Category used when a logging call does not name one",
    )
    log_level: LevelName = Field(
        default="DEBUG",
        description="Threshold of newly created category loggers",
    )
    logging_enabled: bool = Field(
        default=True, description="Master switch for the facade"
    )
    # Structured internal diagnostics for non-fatal errors (dispatcher/sink)
    internal_logging_enabled: bool = Field(
        default=True, description="Emit DEBUG/WARN diagnostics for internal errors"
    )
    enable_metrics: bool = Field(
        default=False, description="Enable Prometheus-compatible delivery metrics"
    )

    @field_validator("app_name", "default_category")
    @classmethod
    def _ensure_non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class RemoteSettings(BaseModel):
    """Remote batch delivery settings."""

    enabled: bool = Field(default=False, description="Attach a batch dispatcher")
    endpoint: str | None = Field(
        default=None, description="URL of the receiving endpoint"
    )
    preset: Literal["all", "debug", "info", "warn", "error"] = Field(
        default="all", description="Threshold preset for delivered records"
    )
    min_level: LevelName | None = Field(
        default=None, description="Explicit threshold; overrides preset"
    )
    coalescing_delay_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Wait after the first queued record before delivering",
    )
    timeout_seconds: float = Field(
        default=5.0, gt=0.0, description="HTTP timeout for one delivery"
    )
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("min_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def resolved_min_level(self) -> Level:
        if self.min_level is not None:
            return parse_level(self.min_level)
        return get_preset_level(self.preset)


class ServerSettings(BaseModel):
    """Receiving endpoint settings."""

    logger_name_override: str | None = Field(
        default=None,
        description="Log every received record under this logger name",
    )
    path: str = Field(default="/remote-logging", description="Endpoint path")


class Settings(BaseSettings):
    """Top-level configuration model."""

    core: CoreSettings = Field(default_factory=CoreSettings)
    remote: RemoteSettings = Field(default_factory=RemoteSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    model_config = SettingsConfigDict(
        env_prefix="RELAYLOG_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    def validate_remote(self) -> None:
        """Check cross-field consistency of the remote group.

        Raises:
            ConfigurationError: If remote delivery is enabled without endpoint.
        """
        if self.remote.enabled and not self.remote.endpoint:
            raise ConfigurationError(
                "remote.endpoint is required when remote.enabled is true"
            )

    def to_dict(self) -> dict[str, object]:
        from typing import cast

        return cast(
            dict[str, object],
            self.model_dump(by_alias=True, exclude_none=True),
        )
