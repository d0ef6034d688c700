"""Public API for service error configuration."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    CodecSettings,
    DepthPolicy,
    LoggingSettings,
    ServiceErrorsSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "CodecSettings",
    "DepthPolicy",
    "LoggingSettings",
    "ServiceErrorsSettings",
    "load_settings",
]
