"""Canonical service error taxonomy.

Every kind shares one constructor shape: an optional positional ``message``
followed by keyword-only ``cause``, ``error_code`` and kind-specific payload.
Blank messages and codes are replaced with the kind's defaults at construction
time, so a constructed error never carries an empty ``message`` or
``error_code``. Errors expose read-only properties and are not mutated after
construction, except through ``rehydrate_message`` which is reserved for the
wire decoder.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping

from . import codes, messages
from .kinds import ErrorKind


def _is_blank(value: str | None) -> bool:
    """Return ``True`` for ``None``, empty, or whitespace-only strings."""
    return value is None or not value.strip()


def _require_text(value: str | None, *, name: str) -> str:
    """Return ``value`` or raise ``ValueError`` when it is blank."""
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if _is_blank(value):
        raise ValueError(f"{name} must not be blank")
    return value  # type: ignore[return-value]


class ServiceError(Exception):
    """Base error raised by service-layer operations."""

    kind: ClassVar[ErrorKind] = ErrorKind.SERVICE
    default_code: ClassVar[str] = codes.SERVICE_ERROR

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: BaseException | None = None,
        error_code: str | None = None,
    ) -> None:
        if cause is not None and not isinstance(cause, BaseException):
            raise TypeError("cause must be an exception instance")
        resolved = self.default_message() if _is_blank(message) else message
        super().__init__(resolved)
        self._message: str = resolved  # type: ignore[assignment]
        self._error_code: str = (
            self.default_code if _is_blank(error_code) else error_code  # type: ignore[assignment]
        )
        self._cause = cause
        self.__cause__ = cause

    def default_message(self) -> str:
        """Return the message used when none is supplied."""
        return messages.SERVICE_DEFAULT

    @property
    def message(self) -> str:
        """Human-readable error message."""
        return self._message

    @property
    def error_code(self) -> str:
        """Machine-readable error code."""
        return self._error_code

    @property
    def cause(self) -> BaseException | None:
        """Error that triggered this one, if any."""
        return self._cause

    def payload(self) -> Mapping[str, Any]:
        """Return kind-specific payload fields keyed by attribute name."""
        return {}

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            _rebuild_error,
            (
                type(self),
                self._message,
                self._error_code,
                self._cause,
                dict(self.payload()),
            ),
        )

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        fields = ", ".join(
            [
                f"message={self._message!r}",
                f"error_code={self._error_code!r}",
                *(f"{key}={value!r}" for key, value in self.payload().items()),
            ]
        )
        return f"{type(self).__name__}({fields})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServiceError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._message == other._message
            and self._error_code == other._error_code
            and dict(self.payload()) == dict(other.payload())
            and self._cause == other._cause
        )

    def __hash__(self) -> int:
        return hash((type(self), self._message, self._error_code))


class SecurityError(ServiceError):
    """Security problem that prevents the requested operation."""

    kind = ErrorKind.SECURITY
    default_code = codes.SECURITY_ERROR

    def default_message(self) -> str:
        return messages.SECURITY_DEFAULT


class AuthenticationError(SecurityError):
    """Authentication failed, typically because of invalid credentials."""

    kind = ErrorKind.AUTHENTICATION
    default_code = codes.AUTH_FAIL

    def default_message(self) -> str:
        return messages.AUTHENTICATION_DEFAULT


class AccessDeniedError(SecurityError):
    """Operation attempted without a required permission."""

    kind = ErrorKind.ACCESS_DENIED
    default_code = codes.ACCESS_DENIED

    def __init__(
        self,
        message: str | None = None,
        *,
        required_permission: str,
        cause: BaseException | None = None,
        error_code: str | None = None,
    ) -> None:
        self._required_permission = _require_text(
            required_permission, name="required_permission"
        )
        super().__init__(message, cause=cause, error_code=error_code)

    def default_message(self) -> str:
        return messages.access_denied(self._required_permission)

    @property
    def required_permission(self) -> str:
        """Permission the caller lacks."""
        return self._required_permission

    def payload(self) -> Mapping[str, Any]:
        return {"required_permission": self._required_permission}


class ConcurrencyError(ServiceError):
    """Concurrent modification conflict on an entity.

    The message is caller-supplied; a blank message falls back to the generic
    service text since this kind has no default of its own.
    """

    kind = ErrorKind.CONCURRENCY
    default_code = codes.CONCURRENCY_ERROR

    def __init__(
        self,
        message: str | None = None,
        *,
        entity: Any = None,
        cause: BaseException | None = None,
        error_code: str | None = None,
    ) -> None:
        self._entity = entity
        super().__init__(message, cause=cause, error_code=error_code)

    @property
    def entity(self) -> Any:
        """Entity involved in the conflict, if supplied."""
        return self._entity

    def payload(self) -> Mapping[str, Any]:
        return {"entity": self._entity}


class ConfigurationError(ServiceError):
    """A configuration key could not be accessed or used."""

    kind = ErrorKind.CONFIGURATION
    default_code = codes.CONFIG_ERROR

    def __init__(
        self,
        message: str | None = None,
        *,
        configuration_key: str,
        cause: BaseException | None = None,
        error_code: str | None = None,
    ) -> None:
        self._configuration_key = _require_text(
            configuration_key, name="configuration_key"
        )
        super().__init__(message, cause=cause, error_code=error_code)

    def default_message(self) -> str:
        return messages.configuration_key(self._configuration_key)

    @property
    def configuration_key(self) -> str:
        """Configuration key that could not be accessed."""
        return self._configuration_key

    def payload(self) -> Mapping[str, Any]:
        return {"configuration_key": self._configuration_key}


class DuplicateEntityError(ServiceError):
    """An entity with the same parameters already exists."""

    kind = ErrorKind.DUPLICATE_ENTITY
    default_code = codes.DUPLICATE_ENTITY_ERROR

    def default_message(self) -> str:
        return messages.DUPLICATE_ENTITY_DEFAULT


class EntityNotFoundError(ServiceError):
    """No entity matching the given parameters exists."""

    kind = ErrorKind.ENTITY_NOT_FOUND
    default_code = codes.NOT_FOUND

    def __init__(
        self,
        message: str | None = None,
        *,
        entity_name: str | None = None,
        cause: BaseException | None = None,
        error_code: str | None = None,
    ) -> None:
        if entity_name is not None and not isinstance(entity_name, str):
            raise TypeError("entity_name must be a string")
        self._entity_name = (
            messages.UNSPECIFIED_ENTITY if _is_blank(entity_name) else entity_name
        )
        super().__init__(message, cause=cause, error_code=error_code)

    def default_message(self) -> str:
        return messages.entity_not_found(self._entity_name)

    @property
    def entity_name(self) -> str:
        """Type name of the entity that could not be found."""
        return self._entity_name

    def payload(self) -> Mapping[str, Any]:
        return {"entity_name": self._entity_name}


def rehydrate_message(error: ServiceError, message: str) -> None:
    """Replace ``error``'s message with a serialized value.

    Decode-only: restores the literal wire message on a reconstructed cause
    whose constructor derived a different one. Not part of the public API.
    """
    if _is_blank(message):
        raise ValueError("rehydrated message must not be blank")
    error._message = message
    error.args = (message,)


def _rebuild_error(
    error_type: type[ServiceError],
    message: str,
    error_code: str,
    cause: BaseException | None,
    payload: Mapping[str, Any],
) -> ServiceError:
    """Reconstruct a pickled error through its keyword constructor."""
    return error_type(message, cause=cause, error_code=error_code, **payload)
