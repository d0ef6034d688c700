"""Guard helpers that raise taxonomy errors when a precondition fails."""

from __future__ import annotations

from typing import Callable, TypeVar

from . import messages
from .types import AccessDeniedError, DuplicateEntityError, EntityNotFoundError

T = TypeVar("T")


def raise_if_none(
    target: T | None,
    *,
    entity_name: str,
    predicate: Callable[[T], bool] | None = None,
    message: str | None = None,
) -> T:
    """Return ``target`` or raise ``EntityNotFoundError``.

    Raises when ``target`` is ``None`` or when ``predicate(target)`` holds.
    """
    if target is None or (predicate is not None and predicate(target)):
        raise EntityNotFoundError(message, entity_name=entity_name)
    return target


def raise_if_exists(
    target: T | None,
    *,
    predicate: Callable[[T], bool] | None = None,
    entity_name: str | None = None,
    message: str | None = None,
) -> None:
    """Raise ``DuplicateEntityError`` when ``target`` exists.

    With a ``predicate``, an existing target only counts as a duplicate when
    ``predicate(target)`` holds.
    """
    if target is None:
        return
    if predicate is not None and not predicate(target):
        return
    raise DuplicateEntityError(message or messages.duplicate_entity(entity_name))


def raise_if_denied(
    predicate: Callable[[T], bool],
    value: T,
    *,
    required_permission: str,
) -> None:
    """Raise ``AccessDeniedError`` when ``predicate(value)`` holds."""
    if predicate is None:
        raise TypeError("predicate must not be None")
    if value is None:
        raise TypeError("value must not be None")
    if not required_permission or not required_permission.strip():
        raise ValueError("required_permission must not be blank")
    if predicate(value):
        raise AccessDeniedError(required_permission=required_permission)
