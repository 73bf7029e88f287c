"""Shared pytest fixtures."""

from __future__ import annotations

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo configure_logging() so no test writes to another test's stream."""
    yield
    structlog.reset_defaults()
