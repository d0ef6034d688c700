"""Field bag for one serialized error envelope.

Every field of an envelope is buffered into ``EnvelopeFields`` before any
dispatch happens, so the order of fields in the source object never matters.
Unknown fields are ignored and ``null`` is treated as absent.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import wire
from .exceptions import MalformedInputError


class EnvelopeFields(BaseModel):
    """Buffered common and kind-specific fields of one envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type_tag: str | None = Field(default=None, alias=wire.TYPE)
    message: str | None = Field(default=None, alias=wire.MESSAGE)
    error_code: str | None = Field(default=None, alias=wire.ERROR_CODE)
    cause_type: str | None = Field(default=None, alias=wire.CAUSE_TYPE)
    cause: dict[str, Any] | None = Field(default=None, alias=wire.CAUSE)

    required_permission: str | None = Field(
        default=None, alias=wire.REQUIRED_PERMISSION
    )
    entity: Any = Field(default=None, alias=wire.ENTITY)
    configuration_key: str | None = Field(default=None, alias=wire.CONFIGURATION_KEY)
    entity_name: str | None = Field(default=None, alias=wire.ENTITY_NAME)


def read_envelope(data: object, *, path: str) -> EnvelopeFields:
    """Buffer ``data`` into an ``EnvelopeFields`` bag.

    Raises ``MalformedInputError`` when ``data`` is not an object or one of its
    known fields has the wrong shape.
    """
    if not isinstance(data, Mapping):
        raise MalformedInputError(
            f"expected an object, got {type(data).__name__}", path=path
        )
    try:
        return EnvelopeFields.model_validate(dict(data))
    except ValidationError as exc:
        raise MalformedInputError(
            _map_validation_error(exc), path=_error_path(exc, path)
        ) from None


def _error_path(error: ValidationError, path: str) -> str:
    """Return the location of the first invalid field under ``path``."""
    location = error.errors()[0].get("loc", ())
    if not location:
        return path
    return wire.child_path(path, str(location[0]))


def _map_validation_error(error: ValidationError) -> str:
    """Map pydantic field failures to stable public messages."""
    first_error = error.errors()[0]
    location = first_error.get("loc", ())
    if not location:
        return str(first_error.get("msg", "invalid envelope"))

    field_name = str(location[0])
    if field_name == wire.CAUSE:
        return "cause must be an object"
    return f"{field_name} must be a string"
