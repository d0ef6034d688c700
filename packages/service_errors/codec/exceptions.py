"""Failure taxonomy for the error envelope codec."""

from __future__ import annotations

from enum import Enum
from typing import Any


class DecodeStage(str, Enum):
    """Codec stage at which a fatal failure occurred."""

    MALFORMED_INPUT = "malformed_input"
    MISSING_DISCRIMINATOR = "missing_discriminator"
    UNKNOWN_TYPE = "unknown_type"
    CONSTRUCTION = "decode_construction_failure"
    CHAIN_TOO_DEEP = "chain_too_deep"


class ErrorCodecError(ValueError):
    """Base error for fatal encode/decode failures."""

    stage: DecodeStage

    def __init__(self, detail: str, *, path: str) -> None:
        self.detail = detail
        self.path = path
        super().__init__(f"{self.stage.value} at {path}: {detail}")

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore_codec_error, (type(self), self.args, dict(self.__dict__)))


class MalformedInputError(ErrorCodecError):
    """Input or one of its fields does not have the expected shape."""

    stage = DecodeStage.MALFORMED_INPUT


class MissingDiscriminatorError(ErrorCodecError):
    """Envelope has no type tag to dispatch on."""

    stage = DecodeStage.MISSING_DISCRIMINATOR


class UnknownErrorTypeError(ErrorCodecError):
    """Type tag of a primary envelope is not registered."""

    stage = DecodeStage.UNKNOWN_TYPE

    def __init__(self, tag: str, *, path: str) -> None:
        self.tag = tag
        super().__init__(f"unregistered error type {tag!r}", path=path)


class DecodeConstructionError(ErrorCodecError):
    """Registered kind rejected the decoded fields."""

    stage = DecodeStage.CONSTRUCTION

    def __init__(self, tag: str, reason: str, *, path: str) -> None:
        self.tag = tag
        super().__init__(f"cannot construct {tag!r}: {reason}", path=path)


class ChainTooDeepError(ErrorCodecError):
    """Cause chain exceeds the configured maximum depth."""

    stage = DecodeStage.CHAIN_TOO_DEEP

    def __init__(self, limit: int, *, path: str) -> None:
        self.limit = limit
        super().__init__(f"cause chain exceeds {limit} links", path=path)


class RegistryError(ValueError):
    """Raised when registry definitions or registration are invalid."""


def _restore_codec_error(
    error_type: type[ErrorCodecError], args: tuple[Any, ...], state: dict[str, Any]
) -> ErrorCodecError:
    """Rebuild a pickled codec error without re-running its constructor."""
    error = error_type.__new__(error_type, *args)
    error.__dict__.update(state)
    return error
