"""Default error code constants for the service error taxonomy.

Each error kind falls back to one of these codes when constructed without an
explicit ``error_code``. Codes are stable machine-readable identifiers and are
emitted verbatim on the wire.
"""

SERVICE_ERROR = "SERVICE_ERROR"

# Security
SECURITY_ERROR = "SECURITY_ERROR"
AUTH_FAIL = "AUTH_FAIL"
ACCESS_DENIED = "ACCESS_DENIED"

# Data / persistence
CONCURRENCY_ERROR = "CONCURRENCY_ERROR"
DUPLICATE_ENTITY_ERROR = "DUPLICATE_ENTITY_ERROR"
NOT_FOUND = "NOT_FOUND"

# Configuration
CONFIG_ERROR = "CONFIG_ERROR"
