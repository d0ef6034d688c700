"""Log handler setup driven by ``LoggingSettings``.

Records are emitted as newline-delimited JSON by default, or as plain text with
the structured context appended as ``key=value`` pairs. When a record carries a
codec failure (anything exposing ``stage`` and ``path``), both formatters
surface those two attributes as fields so rejected envelopes can be located
without parsing the exception text.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from packages.service_errors.config import LoggingSettings

from . import fields
from .context import bind_context, clear_context, get_context


def _failure_fields(record: logging.LogRecord) -> dict[str, str]:
    """Return ``stage``/``path`` of a codec failure attached to ``record``."""
    if not record.exc_info or record.exc_info[1] is None:
        return {}
    exc = record.exc_info[1]
    stage = getattr(exc, "stage", None)
    path = getattr(exc, "path", None)
    if stage is None or path is None:
        return {}
    return {fields.STAGE: str(getattr(stage, "value", stage)), fields.PATH: str(path)}


class ContextFilter(logging.Filter):
    """Copy the bound logging context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_context()
        context.update(_failure_fields(record))
        record.context = context
        return True


class JsonFormatter(logging.Formatter):
    """Emit newline-delimited JSON logs with stable core fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            fields.TIMESTAMP: datetime.now(UTC).isoformat(),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
        }
        payload.update(getattr(record, "context", None) or {})
        if record.exc_info:
            payload[fields.EXCEPTION] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Human-readable formatter that still appends structured context."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return message
        suffix = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{message} {suffix}"


def configure_logging(
    settings: LoggingSettings | None = None,
    *,
    stream: TextIO | None = None,
) -> None:
    """Install one root handler configured from ``settings``.

    Existing root handlers are replaced, and the ``service``/``environment``
    fields are re-seeded, so repeated calls never duplicate output. Blank
    service or environment names leave the field unbound.
    """
    settings = settings if settings is not None else LoggingSettings()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(settings.level)

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stdout)
    handler.setLevel(settings.level)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if settings.json_output else PlainFormatter())
    root.addHandler(handler)

    clear_context(fields.SERVICE, fields.ENVIRONMENT)
    seed = {fields.SERVICE: settings.service, fields.ENVIRONMENT: settings.environment}
    bind_context(**{key: value for key, value in seed.items() if value.strip()})


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger using Python's standard logging hierarchy."""
    return logging.getLogger(name)
