"""Wire field names for serialized error envelopes."""

TYPE = "type"
MESSAGE = "message"
ERROR_CODE = "errorCode"
CAUSE_TYPE = "causeType"
CAUSE = "cause"

# Kind-specific payload fields.
REQUIRED_PERMISSION = "requiredPermission"
ENTITY = "entity"
CONFIGURATION_KEY = "configurationKey"
ENTITY_NAME = "entityName"

ROOT_PATH = "$"


def child_path(path: str, field_name: str) -> str:
    """Return the JSON-path-like location of ``field_name`` under ``path``."""
    return f"{path}.{field_name}"
