"""browser-harness — disposable browser sessions for page-level tests.

Finds a usable driver and browser on the host, serves the page under test
from a throwaway local HTTP server (or falls back to file://), opens a
headless Selenium session against it, and tears everything down after the
test.
"""
from .engine.errors import (  # noqa: F401
    HarnessError,
    DriverNotFoundError,
    ContentNotFoundError,
    ServerStartError,
    SessionLaunchError,
)
from .config import HarnessConfig  # noqa: F401
from .engine.session import HarnessSession, SessionState, open_session  # noqa: F401
