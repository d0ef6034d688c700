"""Closed set of error kinds and their stable wire tags."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Error kinds known to the taxonomy; values are the wire type tags."""

    SERVICE = "service_errors.ServiceError"
    SECURITY = "service_errors.SecurityError"
    AUTHENTICATION = "service_errors.AuthenticationError"
    ACCESS_DENIED = "service_errors.AccessDeniedError"
    CONCURRENCY = "service_errors.ConcurrencyError"
    CONFIGURATION = "service_errors.ConfigurationError"
    DUPLICATE_ENTITY = "service_errors.DuplicateEntityError"
    ENTITY_NOT_FOUND = "service_errors.EntityNotFoundError"

    @property
    def tag(self) -> str:
        """Return the wire tag string for this kind."""
        return self.value
