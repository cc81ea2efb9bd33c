"""content — locate the page under test and serve it over loopback HTTP."""
from .locator import locate_content, DEFAULT_CONTENT_CANDIDATES  # noqa: F401
from .server import ServerHandle, start_content_server, stop_content_server  # noqa: F401
