"""
Configuration models.

Provides Pydantic models for svnbridge configuration with validation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import SvnBridgeBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(SvnBridgeBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
    )


class ExecutionConfig(ConfigBaseModel):
    """How the svn binary is spawned."""

    svn_binary: Annotated[str, Field(min_length=1)] = "svn"
    force_utf8_locale: bool = True
    locale: str = "en_US.UTF-8"


class EncodingConfig(ConfigBaseModel):
    """Output encoding repair configuration section."""

    fallbacks: list[str] = Field(default_factory=lambda: ["utf-8", "gbk", "gb2312", "big5"])
    repair: bool = True

    @field_validator("fallbacks", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string to list."""
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v


class AuthConfig(ConfigBaseModel):
    """Authentication retry configuration section."""

    interactive_prompt: bool = True
    auto_save_credentials: bool = True


class RootsConfig(ConfigBaseModel):
    """Working-copy root configuration section."""

    custom_root: str | None = None

    @field_validator("custom_root", mode="before")
    @classmethod
    def empty_is_none(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        return v


class TimeoutsConfig(ConfigBaseModel):
    """Per-operation subprocess timeouts in seconds (None disables)."""

    default: Annotated[float, Field(gt=0)] | None = None
    credential_validation: Annotated[float, Field(gt=0)] = 10
    file_count: Annotated[float, Field(gt=0)] = 120
    checkout: Annotated[float, Field(gt=0)] = 1800


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True


class SvnBridgeConfig(ConfigBaseModel):
    """Complete svnbridge configuration.

    Top-level model that combines all configuration sections.
    """

    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    encoding: EncodingConfig = Field(default_factory=EncodingConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    roots: RootsConfig = Field(default_factory=RootsConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'auth.interactive_prompt')
            default: Value returned when the key does not exist

        Returns:
            The config value or default
        """
        obj: Any = self
        for part in key.split("."):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return self.model_dump()
