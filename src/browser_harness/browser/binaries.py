"""Browser binary discovery by well-known install locations.

Returns None when nothing matches; the driver then falls back to its own
default binary discovery.
"""
import logging
import os

from .host import OsFamily
from .types import BrowserType

log = logging.getLogger(__name__)

CHROME_BINARIES: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.LINUX: (
        "/usr/bin/chromium-browser",
        "/usr/bin/chromium",
        "/snap/bin/chromium",
        "/usr/bin/google-chrome",
        "/usr/bin/google-chrome-stable",
        "/opt/google/chrome/chrome",
    ),
    OsFamily.MAC: (
        "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
        "/Applications/Chromium.app/Contents/MacOS/Chromium",
        "/Applications/Google Chrome for Testing.app/Contents/MacOS/Google Chrome for Testing",
    ),
    OsFamily.WINDOWS: (
        r"C:\Program Files\Google\Chrome\Application\chrome.exe",
        r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
        r"C:\Program Files\Chromium\Application\chrome.exe",
    ),
}

EDGE_BINARIES: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.LINUX: (
        "/usr/bin/microsoft-edge",
        "/usr/bin/microsoft-edge-stable",
        "/opt/microsoft/msedge/msedge",
    ),
    OsFamily.MAC: (
        "/Applications/Microsoft Edge.app/Contents/MacOS/Microsoft Edge",
    ),
    OsFamily.WINDOWS: (
        r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
        r"C:\Program Files\Microsoft\Edge\Application\msedge.exe",
    ),
}

# Google ships no arm64 Linux build of Chrome.
_NO_ARM_LINUX = ("google-chrome", "/opt/google/")


def binary_candidates(browser_type: BrowserType, os_family: OsFamily, is_arm: bool) -> list[str]:
    """Ordered install locations to probe for *browser_type* on this host."""
    table = EDGE_BINARIES if browser_type is BrowserType.EDGE else CHROME_BINARIES
    candidates = list(table.get(os_family, ()))
    if is_arm and os_family is OsFamily.LINUX:
        candidates = [c for c in candidates if not any(tag in c for tag in _NO_ARM_LINUX)]
    return candidates


def locate_browser_binary(browser_type: BrowserType, os_family: OsFamily,
                          is_arm: bool = False) -> str | None:
    """Return the first existing browser binary, or None."""
    for candidate in binary_candidates(browser_type, os_family, is_arm):
        if os.path.isfile(candidate):
            log.debug("Found %s binary at %s", browser_type.value, candidate)
            return candidate
    log.info("No %s binary at known locations; driver will use its default", browser_type.value)
    return None
