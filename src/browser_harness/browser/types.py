"""Browser identity and resolved driver configuration."""
from dataclasses import dataclass
from enum import Enum


class BrowserType(Enum):
    CHROME = "chrome"
    EDGE = "edge"


@dataclass(frozen=True)
class BrowserConfig:
    """A driver executable paired with the browser it controls.

    ``binary_path`` is None when no binary was found at a known location.
    """
    browser_type: BrowserType
    driver_path: str
    binary_path: str | None = None
