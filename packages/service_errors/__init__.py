"""Service error taxonomy and self-describing wire codec."""

from .codec import (
    ChainTooDeepError,
    DecodeConstructionError,
    ErrorCodec,
    ErrorCodecError,
    ErrorKindEntry,
    ErrorRegistry,
    MalformedInputError,
    MissingDiscriminatorError,
    UnknownErrorTypeError,
    build_default_registry,
    decode_error,
    dumps_error,
    encode_error,
    loads_error,
)
from .errors import (
    AccessDeniedError,
    AuthenticationError,
    ConcurrencyError,
    ConfigurationError,
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorKind,
    OpaqueError,
    SecurityError,
    ServiceError,
    raise_if_denied,
    raise_if_exists,
    raise_if_none,
)

__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ChainTooDeepError",
    "ConcurrencyError",
    "ConfigurationError",
    "DecodeConstructionError",
    "DuplicateEntityError",
    "EntityNotFoundError",
    "ErrorCodec",
    "ErrorCodecError",
    "ErrorKind",
    "ErrorKindEntry",
    "ErrorRegistry",
    "MalformedInputError",
    "MissingDiscriminatorError",
    "OpaqueError",
    "SecurityError",
    "ServiceError",
    "UnknownErrorTypeError",
    "build_default_registry",
    "decode_error",
    "dumps_error",
    "encode_error",
    "loads_error",
    "raise_if_denied",
    "raise_if_exists",
    "raise_if_none",
]
