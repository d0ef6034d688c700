"""Shared fixtures for service error tests."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from packages.service_errors.logging import clear_context


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Restore root handlers, level, and bound context after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    clear_context()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_context()
