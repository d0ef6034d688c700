"""Default human-readable messages for the service error taxonomy."""

from __future__ import annotations

SERVICE_DEFAULT = "An exception occurred during service operation."

SECURITY_DEFAULT = (
    "A security issue has been detected, preventing the requested operation. "
    "Please contact support if you need further assistance"
)

AUTHENTICATION_DEFAULT = (
    "Authentication failed. Please check your credentials and try again."
)

DUPLICATE_ENTITY_DEFAULT = (
    "An entity with the same parameters already exists. Proceeding with the "
    "requested operation would violate constraints on UNIQUENESS."
)

UNKNOWN_CAUSE_DEFAULT = "An error occurred."

# Placeholder entity name when a not-found error does not name its entity.
UNSPECIFIED_ENTITY = "Unspecified"


def access_denied(permission: str) -> str:
    """Return the default message for a missing permission."""
    return f"User lacks required permission: {permission}."


def configuration_key(key: str) -> str:
    """Return the default message for an inaccessible configuration key."""
    return f"An error occurred while accessing the configuration key [{key}]."


def entity_not_found(entity_name: str) -> str:
    """Return the default message for a missing entity of one type."""
    return f"No `{entity_name}` entity matching the given parameters could be found."


def duplicate_entity(entity_name: str | None = None) -> str:
    """Return the default duplicate message, naming the entity type if known."""
    if entity_name is None or not entity_name.strip():
        return DUPLICATE_ENTITY_DEFAULT
    return (
        f"A `{entity_name}` entity with the same parameters already exists. "
        "Proceeding with the requested operation would violate constraints on "
        "UNIQUENESS."
    )
