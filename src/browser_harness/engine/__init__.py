"""engine — error taxonomy. The session manager lives in engine.session."""
from .errors import (  # noqa: F401
    FailureKind,
    HarnessError,
    DriverNotFoundError,
    ContentNotFoundError,
    ServerStartError,
    SessionLaunchError,
)
