"""Decoder rebuilding taxonomy errors from wire envelopes.

Decoding buffers one envelope into a field bag, resolves its cause first
(recursively, bottom-up), restores the literal serialized message on causes
whose reconstruction computed a different one, and finally dispatches on the
envelope's own type tag. Causes with unregistered tags degrade to
``OpaqueError``; a primary envelope with an unregistered tag is fatal.
"""

from __future__ import annotations

from packages.service_errors.config import CodecSettings
from packages.service_errors.errors import ErrorKind, OpaqueError, ServiceError
from packages.service_errors.errors.types import rehydrate_message
from packages.service_errors.logging import fields, get_logger, log_context

from . import wire
from .envelope import EnvelopeFields, read_envelope
from .exceptions import (
    ChainTooDeepError,
    DecodeConstructionError,
    MissingDiscriminatorError,
    UnknownErrorTypeError,
)
from .registry import ErrorKindEntry, ErrorRegistry

_LOGGER = get_logger(__name__)

# Tag assumed for a cause envelope that names no type at all.
GENERIC_CAUSE_TAG = ErrorKind.SERVICE.tag


class ErrorDecoder:
    """Decode JSON-compatible envelope objects into taxonomy errors."""

    def __init__(self, *, registry: ErrorRegistry, settings: CodecSettings) -> None:
        self._registry = registry
        self._settings = settings

    def decode(self, data: object) -> ServiceError:
        """Return the error described by ``data``.

        Raises an ``ErrorCodecError`` subclass when the envelope is malformed,
        untagged, of an unknown type, exceeds the depth limit, or carries
        fields its kind rejects.
        """
        path = wire.ROOT_PATH
        envelope = read_envelope(data, path=path)
        tag = envelope.type_tag
        if tag is None or not tag.strip():
            raise MissingDiscriminatorError(
                f"missing required field {wire.TYPE!r}", path=path
            )
        entry = self._registry.resolve(tag)
        if entry is None:
            raise UnknownErrorTypeError(tag, path=path)

        error = self._build(entry, envelope, depth=0, path=path)
        _LOGGER.debug("Decoded error envelope for %s", tag)
        return error

    def _build(
        self, entry: ErrorKindEntry, envelope: EnvelopeFields, *, depth: int, path: str
    ) -> ServiceError:
        """Construct one error after resolving its cause."""
        cause = self._resolve_cause(envelope, depth=depth + 1, path=path)
        try:
            return entry.decode(envelope, cause)
        except (TypeError, ValueError) as exc:
            raise DecodeConstructionError(entry.tag, str(exc), path=path) from exc

    def _resolve_cause(
        self, envelope: EnvelopeFields, *, depth: int, path: str
    ) -> BaseException | None:
        """Decode the cause of ``envelope``, if present."""
        if envelope.cause is None:
            return None

        cause_path = wire.child_path(path, wire.CAUSE)
        if depth > self._settings.max_cause_depth:
            return self._reject_or_truncate(cause_path)

        cause_envelope = read_envelope(envelope.cause, path=cause_path)
        tag = _cause_tag(envelope, cause_envelope)
        entry = self._registry.resolve(tag)
        if entry is None:
            with log_context({fields.CAUSE_TYPE: tag, fields.PATH: cause_path}):
                _LOGGER.warning("Unregistered cause type; decoding as opaque error")
            return OpaqueError(cause_envelope.message, type_name=tag)

        cause = self._build(entry, cause_envelope, depth=depth, path=cause_path)
        _restore_serialized_message(cause, cause_envelope.message, path=cause_path)
        return cause

    def _reject_or_truncate(self, path: str) -> None:
        """Apply the configured depth policy at an over-limit cause."""
        limit = self._settings.max_cause_depth
        if self._settings.depth_policy == "reject":
            raise ChainTooDeepError(limit, path=path)
        with log_context({fields.PATH: path, fields.DEPTH_LIMIT: limit}):
            _LOGGER.warning("Cause chain truncated while decoding")
        return None


def _cause_tag(envelope: EnvelopeFields, cause_envelope: EnvelopeFields) -> str:
    """Return the tag to resolve a cause with.

    The companion ``causeType`` wins; the cause's own ``type`` is used when it
    is absent, and the generic service tag when neither is present.
    """
    for candidate in (envelope.cause_type, cause_envelope.type_tag):
        if candidate is not None and candidate.strip():
            return candidate
    return GENERIC_CAUSE_TAG


def _restore_serialized_message(
    cause: ServiceError, serialized: str | None, *, path: str
) -> None:
    """Force ``cause.message`` back to the serialized value when they differ."""
    if serialized is None or not serialized.strip():
        return
    if cause.message.casefold() == serialized.casefold():
        return
    with log_context({fields.ERROR_TYPE: type(cause).__qualname__, fields.PATH: path}):
        _LOGGER.info("Restoring serialized message on reconstructed cause")
    rehydrate_message(cause, serialized)
