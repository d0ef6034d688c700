"""Canonical logging field names for structured codec logs."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"

# Codec fields.
ERROR_TYPE = "error_type"
CAUSE_TYPE = "cause_type"
PATH = "path"
STAGE = "stage"
DEPTH_LIMIT = "depth_limit"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
