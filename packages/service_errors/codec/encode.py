"""Encoder walking an error and its cause chain into wire envelopes."""

from __future__ import annotations

from typing import Any

from packages.service_errors.config import CodecSettings
from packages.service_errors.errors import OpaqueError, ServiceError
from packages.service_errors.logging import fields, get_logger, log_context

from . import wire
from .exceptions import ChainTooDeepError, UnknownErrorTypeError
from .registry import ErrorKindEntry, ErrorRegistry

_LOGGER = get_logger(__name__)


def external_type_name(error: BaseException) -> str:
    """Return the wire type identifier for a non-taxonomy exception."""
    error_type = type(error)
    return f"{error_type.__module__}.{error_type.__qualname__}"


class ErrorEncoder:
    """Encode taxonomy errors into JSON-compatible envelope dicts."""

    def __init__(self, *, registry: ErrorRegistry, settings: CodecSettings) -> None:
        self._registry = registry
        self._settings = settings

    def encode(self, error: ServiceError) -> dict[str, Any]:
        """Return the envelope for ``error`` including its full cause chain."""
        entry = self._registry.entry_for(error)
        if entry is None:
            raise UnknownErrorTypeError(external_type_name(error), path=wire.ROOT_PATH)
        envelope = self._envelope(entry, error, depth=0, path=wire.ROOT_PATH)
        _LOGGER.debug("Encoded error envelope for %s", entry.tag)
        return envelope

    def _envelope(
        self, entry: ErrorKindEntry, error: ServiceError, *, depth: int, path: str
    ) -> dict[str, Any]:
        """Build one envelope, recursing into ``error.cause``."""
        envelope: dict[str, Any] = {
            wire.TYPE: entry.tag,
            wire.MESSAGE: error.message,
            wire.ERROR_CODE: error.error_code,
        }
        if error.cause is not None and self._within_depth(depth + 1, path):
            cause_type, cause_envelope = self._cause_envelope(
                error.cause,
                depth=depth + 1,
                path=wire.child_path(path, wire.CAUSE),
            )
            envelope[wire.CAUSE_TYPE] = cause_type
            envelope[wire.CAUSE] = cause_envelope
        envelope.update(entry.encode(error))
        return envelope

    def _cause_envelope(
        self, cause: BaseException, *, depth: int, path: str
    ) -> tuple[str, dict[str, Any]]:
        """Return ``(cause_type, envelope)`` for one cause link."""
        if isinstance(cause, OpaqueError):
            return cause.type_name, {
                wire.TYPE: cause.type_name,
                wire.MESSAGE: cause.message,
            }

        entry = self._registry.entry_for(cause)
        if entry is not None and isinstance(cause, ServiceError):
            return entry.tag, self._envelope(entry, cause, depth=depth, path=path)

        type_name = external_type_name(cause)
        return type_name, {
            wire.TYPE: type_name,
            wire.MESSAGE: str(cause) or type(cause).__name__,
        }

    def _within_depth(self, depth: int, path: str) -> bool:
        """Apply the configured depth policy to one more cause link."""
        limit = self._settings.max_cause_depth
        if depth <= limit:
            return True
        if self._settings.depth_policy == "reject":
            raise ChainTooDeepError(limit, path=wire.child_path(path, wire.CAUSE))
        with log_context({fields.PATH: path, fields.DEPTH_LIMIT: limit}):
            _LOGGER.warning("Cause chain truncated while encoding")
        return False
