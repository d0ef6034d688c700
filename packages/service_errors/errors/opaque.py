"""Stand-in for causes whose wire type tag is not recognized."""

from __future__ import annotations

from typing import Any

from . import messages


class OpaqueError(Exception):
    """Reduced error preserving only a message and the original type tag.

    Produced by the decoder for causes it cannot resolve. Re-encoding keeps
    exactly these two fields.
    """

    def __init__(self, message: str | None, *, type_name: str) -> None:
        if not type_name or not type_name.strip():
            raise ValueError("type_name must not be blank")
        resolved = (
            messages.UNKNOWN_CAUSE_DEFAULT
            if message is None or not message.strip()
            else message
        )
        super().__init__(resolved)
        self._message = resolved
        self._type_name = type_name

    @property
    def message(self) -> str:
        """Message captured from the serialized cause."""
        return self._message

    @property
    def type_name(self) -> str:
        """Unresolved type tag recorded for diagnostics."""
        return self._type_name

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild_opaque, (self._message, self._type_name))

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        return f"OpaqueError(message={self._message!r}, type_name={self._type_name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OpaqueError):
            return NotImplemented
        return (self._message, self._type_name) == (other._message, other._type_name)

    def __hash__(self) -> int:
        return hash((self._message, self._type_name))


def _rebuild_opaque(message: str, type_name: str) -> OpaqueError:
    """Reconstruct a pickled ``OpaqueError``."""
    return OpaqueError(message, type_name=type_name)
