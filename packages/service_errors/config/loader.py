"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI/init params
2) Environment variables
3) YAML config file
4) Model defaults

Environment variable format:
- Prefix: ``SERVICE_ERRORS_``
- Nested keys: ``__`` separator
- Example: ``SERVICE_ERRORS_CODEC__MAX_CAUSE_DEPTH=8`` -> ``codec.max_cause_depth = 8``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pydantic_settings import SettingsConfigDict

from .models import DEFAULT_CONFIG_PATH, ServiceErrorsSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> ServiceErrorsSettings:
    """Resolve settings from init params, environment, and YAML file."""
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    class _ScopedSettings(ServiceErrorsSettings):
        model_config = SettingsConfigDict(yaml_file=resolved)

    return _ScopedSettings(**dict(cli_params or {}))
