"""Public service error taxonomy API."""

from . import codes, messages
from .guards import raise_if_denied, raise_if_exists, raise_if_none
from .kinds import ErrorKind
from .opaque import OpaqueError
from .types import (
    AccessDeniedError,
    AuthenticationError,
    ConcurrencyError,
    ConfigurationError,
    DuplicateEntityError,
    EntityNotFoundError,
    SecurityError,
    ServiceError,
)

__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ConcurrencyError",
    "ConfigurationError",
    "DuplicateEntityError",
    "EntityNotFoundError",
    "ErrorKind",
    "OpaqueError",
    "SecurityError",
    "ServiceError",
    "codes",
    "messages",
    "raise_if_denied",
    "raise_if_exists",
    "raise_if_none",
]
