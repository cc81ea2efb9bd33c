"""Normalized failure kinds for harness setup.

Every setup failure maps to one of these kinds so the session manager can
decide uniformly whether to abort or fall back.
"""
from enum import Enum


class FailureKind(Enum):
    """Failure categories raised during session setup."""
    DRIVER_NOT_FOUND = "driver_not_found"    # no usable driver/browser pair
    CONTENT_NOT_FOUND = "content_not_found"  # test artifact missing
    SERVER_START = "server_start"            # content server never became ready
    SESSION_LAUNCH = "session_launch"        # driver/browser failed or page never loaded

    @property
    def fatal(self) -> bool:
        """True when setup must abort instead of falling back."""
        return self is not FailureKind.SERVER_START


class HarnessError(Exception):
    """Exception carrying a FailureKind for setup error handling."""

    def __init__(self, kind: FailureKind, message: str = ""):
        self.kind = kind
        super().__init__(message or kind.value)


class DriverNotFoundError(HarnessError):
    """No driver executable was found in any search tier."""

    def __init__(self, searched: list[str] | None = None, message: str = ""):
        self.searched = list(searched or [])
        if not message:
            message = "No usable browser driver found"
            if self.searched:
                message += "; searched: " + ", ".join(self.searched)
        super().__init__(FailureKind.DRIVER_NOT_FOUND, message)


class ContentNotFoundError(HarnessError):
    """None of the candidate HTML artifacts exist."""

    def __init__(self, candidates: list[str] | None = None, message: str = ""):
        self.candidates = list(candidates or [])
        if not message:
            message = "Test content not found; tried: " + ", ".join(self.candidates)
        super().__init__(FailureKind.CONTENT_NOT_FOUND, message)


class ServerStartError(HarnessError):
    """The static content server could not be started or never answered 200."""

    def __init__(self, message: str = ""):
        super().__init__(FailureKind.SERVER_START, message)


class SessionLaunchError(HarnessError):
    """The driver or browser failed to start, or the page never became ready."""

    def __init__(self, message: str = ""):
        super().__init__(FailureKind.SESSION_LAUNCH, message)
