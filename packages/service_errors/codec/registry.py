"""Type-tag registry mapping error kinds to their wire encode/decode rules.

The registry is populated once, frozen, and then only read. Lookups are by
exact tag when decoding and by concrete type (falling back to the nearest
registered ancestor) when encoding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, Mapping

from pydantic_core import to_jsonable_python

from packages.service_errors.errors import (
    AccessDeniedError,
    AuthenticationError,
    ConcurrencyError,
    ConfigurationError,
    DuplicateEntityError,
    EntityNotFoundError,
    ErrorKind,
    SecurityError,
    ServiceError,
)

from . import wire
from .envelope import EnvelopeFields
from .exceptions import RegistryError

EncodeRule = Callable[[Any], Mapping[str, Any]]
DecodeRule = Callable[[EnvelopeFields, "BaseException | None"], ServiceError]


@dataclass(frozen=True, slots=True)
class ErrorKindEntry:
    """Encode/decode rules for one registered error kind."""

    tag: str
    error_type: type[ServiceError]
    encode: EncodeRule
    decode: DecodeRule

    def __post_init__(self) -> None:
        """Validate entry invariants."""
        if not self.tag or not self.tag.strip():
            raise RegistryError("tag must not be empty")
        if not (
            isinstance(self.error_type, type) and issubclass(self.error_type, ServiceError)
        ):
            raise RegistryError(f"{self.tag}: error_type must subclass ServiceError")


@dataclass(slots=True)
class ErrorRegistry:
    """In-memory registry of error kinds keyed by wire tag."""

    _by_tag: dict[str, ErrorKindEntry] = field(default_factory=dict)
    _by_type: dict[type[ServiceError], ErrorKindEntry] = field(default_factory=dict)
    _frozen: bool = False
    _lock: RLock = field(default_factory=RLock)

    def register(self, entry: ErrorKindEntry) -> None:
        """Register one kind, rejecting duplicate tags and types."""
        with self._lock:
            if self._frozen:
                raise RegistryError(f"registry is frozen; cannot register {entry.tag}")
            if entry.tag in self._by_tag:
                raise RegistryError(f"duplicate error tag: {entry.tag}")
            if entry.error_type in self._by_type:
                raise RegistryError(
                    f"duplicate error type: {entry.error_type.__qualname__}"
                )
            self._by_tag[entry.tag] = entry
            self._by_type[entry.error_type] = entry

    def freeze(self) -> "ErrorRegistry":
        """Reject further registration and return ``self``."""
        with self._lock:
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        """Return ``True`` once registration is closed."""
        return self._frozen

    def resolve(self, tag: str) -> ErrorKindEntry | None:
        """Return the entry registered for ``tag``, if any."""
        return self._by_tag.get(tag)

    def entry_for(self, error: BaseException) -> ErrorKindEntry | None:
        """Return the entry for ``error``'s type or nearest registered ancestor."""
        for candidate in type(error).__mro__:
            entry = self._by_type.get(candidate)  # type: ignore[arg-type]
            if entry is not None:
                return entry
        return None

    def tags(self) -> tuple[str, ...]:
        """Return registered tags sorted alphabetically."""
        return tuple(sorted(self._by_tag))

    def __contains__(self, tag: object) -> bool:
        return tag in self._by_tag

    def __len__(self) -> int:
        return len(self._by_tag)


def _no_payload(error: ServiceError) -> Mapping[str, Any]:
    """Encode rule for kinds without kind-specific fields."""
    return {}


def _encode_access_denied(error: AccessDeniedError) -> Mapping[str, Any]:
    return {wire.REQUIRED_PERMISSION: error.required_permission}


def _encode_concurrency(error: ConcurrencyError) -> Mapping[str, Any]:
    return {wire.ENTITY: to_jsonable_python(error.entity, fallback=str)}


def _encode_configuration(error: ConfigurationError) -> Mapping[str, Any]:
    return {wire.CONFIGURATION_KEY: error.configuration_key}


def _encode_entity_not_found(error: EntityNotFoundError) -> Mapping[str, Any]:
    return {wire.ENTITY_NAME: error.entity_name}


def _decode_plain(
    error_type: type[ServiceError],
) -> DecodeRule:
    """Build a decode rule for kinds carrying only common fields."""

    def decode(fields: EnvelopeFields, cause: BaseException | None) -> ServiceError:
        return error_type(fields.message, cause=cause, error_code=fields.error_code)

    return decode


def _decode_access_denied(
    fields: EnvelopeFields, cause: BaseException | None
) -> ServiceError:
    return AccessDeniedError(
        fields.message,
        required_permission=fields.required_permission or "",
        cause=cause,
        error_code=fields.error_code,
    )


def _decode_concurrency(
    fields: EnvelopeFields, cause: BaseException | None
) -> ServiceError:
    return ConcurrencyError(
        fields.message,
        entity=fields.entity,
        cause=cause,
        error_code=fields.error_code,
    )


def _decode_configuration(
    fields: EnvelopeFields, cause: BaseException | None
) -> ServiceError:
    return ConfigurationError(
        fields.message,
        configuration_key=fields.configuration_key or "",
        cause=cause,
        error_code=fields.error_code,
    )


def _decode_entity_not_found(
    fields: EnvelopeFields, cause: BaseException | None
) -> ServiceError:
    return EntityNotFoundError(
        fields.message,
        entity_name=fields.entity_name,
        cause=cause,
        error_code=fields.error_code,
    )


_BUILTIN_ENTRIES: tuple[ErrorKindEntry, ...] = (
    ErrorKindEntry(
        tag=ErrorKind.SERVICE.tag,
        error_type=ServiceError,
        encode=_no_payload,
        decode=_decode_plain(ServiceError),
    ),
    ErrorKindEntry(
        tag=ErrorKind.SECURITY.tag,
        error_type=SecurityError,
        encode=_no_payload,
        decode=_decode_plain(SecurityError),
    ),
    ErrorKindEntry(
        tag=ErrorKind.AUTHENTICATION.tag,
        error_type=AuthenticationError,
        encode=_no_payload,
        decode=_decode_plain(AuthenticationError),
    ),
    ErrorKindEntry(
        tag=ErrorKind.ACCESS_DENIED.tag,
        error_type=AccessDeniedError,
        encode=_encode_access_denied,
        decode=_decode_access_denied,
    ),
    ErrorKindEntry(
        tag=ErrorKind.CONCURRENCY.tag,
        error_type=ConcurrencyError,
        encode=_encode_concurrency,
        decode=_decode_concurrency,
    ),
    ErrorKindEntry(
        tag=ErrorKind.CONFIGURATION.tag,
        error_type=ConfigurationError,
        encode=_encode_configuration,
        decode=_decode_configuration,
    ),
    ErrorKindEntry(
        tag=ErrorKind.DUPLICATE_ENTITY.tag,
        error_type=DuplicateEntityError,
        encode=_no_payload,
        decode=_decode_plain(DuplicateEntityError),
    ),
    ErrorKindEntry(
        tag=ErrorKind.ENTITY_NOT_FOUND.tag,
        error_type=EntityNotFoundError,
        encode=_encode_entity_not_found,
        decode=_decode_entity_not_found,
    ),
)


def builtin_entries() -> tuple[ErrorKindEntry, ...]:
    """Return entries for every kind in the built-in taxonomy."""
    return _BUILTIN_ENTRIES


def build_default_registry(*, freeze: bool = True) -> ErrorRegistry:
    """Return a new registry holding the built-in taxonomy.

    Pass ``freeze=False`` to register additional kinds before freezing.
    """
    registry = ErrorRegistry()
    for entry in _BUILTIN_ENTRIES:
        registry.register(entry)
    if freeze:
        registry.freeze()
    return registry


DEFAULT_REGISTRY: ErrorRegistry = build_default_registry()
