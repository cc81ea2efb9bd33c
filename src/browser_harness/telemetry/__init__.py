"""telemetry — structured lifecycle event logging."""
from .logger import SessionEventLogger  # noqa: F401
