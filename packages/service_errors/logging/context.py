"""Structured context attached to codec log records.

The codec scopes ``path``/``cause_type``/``stage`` fields to the link of the
cause chain it is working on with ``log_context``; ``configure_logging`` seeds
process-wide ``service``/``environment`` fields with ``bind_context``. Values
live in a ``ContextVar`` so concurrent decodes never see each other's fields.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Iterator, Mapping

_EMPTY: Mapping[str, str] = MappingProxyType({})

_LOG_CONTEXT: ContextVar[Mapping[str, str]] = ContextVar(
    "service_errors_log_context", default=_EMPTY
)


def _merged(values: Mapping[str, object]) -> Mapping[str, str]:
    """Return the current context overlaid with stringified non-``None`` values."""
    merged = dict(_LOG_CONTEXT.get())
    merged.update(
        {str(key): str(value) for key, value in values.items() if value is not None}
    )
    return MappingProxyType(merged)


def get_context() -> dict[str, str]:
    """Return a copy of the fields bound in the current context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind fields for the rest of the current context."""
    if values:
        _LOG_CONTEXT.set(_merged(values))


def clear_context(*keys: str) -> None:
    """Unbind ``keys``, or every field when none are given."""
    if not keys:
        _LOG_CONTEXT.set(_EMPTY)
        return
    remaining = {
        key: value for key, value in _LOG_CONTEXT.get().items() if key not in keys
    }
    _LOG_CONTEXT.set(MappingProxyType(remaining))


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` only for the duration of the block."""
    token = _LOG_CONTEXT.set(_merged(values))
    try:
        yield
    finally:
        _LOG_CONTEXT.reset(token)
