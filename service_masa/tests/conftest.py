"""
Fixtures for Masa MCP Service unit tests.
"""

import pytest
import structlog

from shared.logging import clear_context
from shared.test_helpers import FakeClock, RecordingSleep


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep structlog configuration and context from leaking between tests."""
    yield
    structlog.reset_defaults()
    clear_context()


@pytest.fixture
def clock():
    """Controllable clock."""
    return FakeClock()


@pytest.fixture
def sleep(clock):
    """Recording sleep that advances the fake clock."""
    return RecordingSleep(clock)
