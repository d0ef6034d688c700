"""Public logging API for service error tooling.

Wraps Python's ``logging`` module with stdout defaults and structured context
propagation.
"""

from .config import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
    configure_logging,
    get_logger,
)
from .context import bind_context, clear_context, get_context, log_context

__all__ = [
    "ContextFilter",
    "JsonFormatter",
    "PlainFormatter",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_context",
    "get_logger",
    "log_context",
]
