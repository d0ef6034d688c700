"""Facade combining encoder and decoder with JSON text helpers."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

from packages.service_errors.config import CodecSettings, load_settings
from packages.service_errors.errors import ServiceError
from packages.service_errors.logging import fields, get_logger, log_context

from . import wire
from .decode import ErrorDecoder
from .encode import ErrorEncoder
from .exceptions import ErrorCodecError, MalformedInputError
from .registry import DEFAULT_REGISTRY, ErrorRegistry

_LOGGER = get_logger(__name__)


class ErrorCodec:
    """Encode/decode service errors to and from self-describing envelopes.

    Stateless after construction and safe to share between threads; the
    registry should be frozen before it is handed to a codec.
    """

    def __init__(
        self,
        *,
        registry: ErrorRegistry | None = None,
        settings: CodecSettings | None = None,
    ) -> None:
        self._registry = registry if registry is not None else DEFAULT_REGISTRY
        self._settings = settings if settings is not None else CodecSettings()
        self._encoder = ErrorEncoder(registry=self._registry, settings=self._settings)
        self._decoder = ErrorDecoder(registry=self._registry, settings=self._settings)

    @property
    def registry(self) -> ErrorRegistry:
        """Registry used for tag dispatch."""
        return self._registry

    @property
    def settings(self) -> CodecSettings:
        """Depth limits applied by this codec."""
        return self._settings

    def encode(self, error: ServiceError) -> dict[str, Any]:
        """Return the envelope dict for ``error``."""
        return self._encoder.encode(error)

    def decode(self, data: object) -> ServiceError:
        """Return the error described by envelope ``data``."""
        try:
            return self._decoder.decode(data)
        except ErrorCodecError as exc:
            with log_context({fields.STAGE: exc.stage.value, fields.PATH: exc.path}):
                _LOGGER.debug("Rejected error envelope: %s", exc.detail)
            raise

    def dumps(self, error: ServiceError) -> str:
        """Return ``error`` serialized as compact JSON text."""
        return json.dumps(self.encode(error), separators=(",", ":"), default=str)

    def loads(self, raw: str | bytes | bytearray) -> ServiceError:
        """Parse JSON text and decode the envelope it holds."""
        try:
            data = json.loads(raw)
        except RecursionError as exc:
            raise MalformedInputError(
                "JSON nesting exceeds the parser recursion limit", path=wire.ROOT_PATH
            ) from exc
        except (TypeError, ValueError) as exc:
            raise MalformedInputError(
                f"invalid JSON: {exc}", path=wire.ROOT_PATH
            ) from exc
        return self.decode(data)


@lru_cache(maxsize=1)
def get_default_codec() -> ErrorCodec:
    """Return a process-wide codec configured from loaded settings."""
    return ErrorCodec(settings=load_settings().codec)


def encode_error(error: ServiceError) -> dict[str, Any]:
    """Encode ``error`` with the default codec."""
    return get_default_codec().encode(error)


def decode_error(data: object) -> ServiceError:
    """Decode envelope ``data`` with the default codec."""
    return get_default_codec().decode(data)


def dumps_error(error: ServiceError) -> str:
    """Serialize ``error`` to JSON text with the default codec."""
    return get_default_codec().dumps(error)


def loads_error(raw: str | bytes | bytearray) -> ServiceError:
    """Deserialize JSON text with the default codec."""
    return get_default_codec().loads(raw)
