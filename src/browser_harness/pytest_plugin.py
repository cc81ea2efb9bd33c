"""pytest fixtures: one fresh HarnessSession per test.

Loaded automatically through the ``pytest11`` entry point once the package
is installed. Override ``harness_config`` to customise the session.
"""
import pytest

from .config import HarnessConfig
from .engine.session import HarnessSession


@pytest.fixture
def harness_config() -> HarnessConfig:
    return HarnessConfig.from_env()


@pytest.fixture
def harness_session(request, harness_config):
    """A READY session; torn down after the test even if the test fails."""
    session = HarnessSession(harness_config, test_name=request.node.nodeid)
    session.setup()
    try:
        yield session
    finally:
        session.teardown()
