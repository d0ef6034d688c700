"""Typed configuration models for service error tooling."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = (
    Path.home() / ".config" / "service-errors" / "service-errors.yaml"
)

DepthPolicy = Literal["reject", "truncate"]


class LoggingSettings(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "service-errors"
    environment: str = "dev"


class CodecSettings(BaseModel):
    """Error codec limits.

    ``max_cause_depth`` bounds the number of cause links walked in one
    envelope. ``depth_policy`` selects whether deeper chains are rejected or
    truncated at the limit.
    """

    max_cause_depth: int = Field(default=32, gt=0)
    depth_policy: DepthPolicy = "reject"


class ServiceErrorsSettings(BaseSettings):
    """Root settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_ERRORS_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
        yaml_file=DEFAULT_CONFIG_PATH,
        yaml_file_encoding="utf-8",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    codec: CodecSettings = Field(default_factory=CodecSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply precedence: init > env > yaml > model defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
        )
