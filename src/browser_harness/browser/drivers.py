"""Driver discovery: project-local driver folder first, then system paths.

Resolution is a strict tiered search, first hit wins:

1. ``<driver_dir>`` Edge driver
2. ``<driver_dir>`` Chrome driver
3. system Chrome driver paths for the host OS
4. system Edge driver paths (Windows only)

Candidate lists are ordered tuples; callers may override them.
"""
import logging
import os
import stat

from ..engine.errors import DriverNotFoundError
from .binaries import locate_browser_binary
from .host import Environment, OsFamily, probe_environment
from .types import BrowserConfig, BrowserType

log = logging.getLogger(__name__)

# Relative to the project-local driver folder. Includes the layout of the
# vendor download archives (e.g. chromedriver-linux64/chromedriver).
_LOCAL_CHROME_DRIVERS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.WINDOWS: ("chromedriver.exe", "chromedriver-win64/chromedriver.exe",
                       "chromedriver-win32/chromedriver.exe"),
    OsFamily.LINUX: ("chromedriver", "chromedriver-linux64/chromedriver"),
    OsFamily.MAC: ("chromedriver", "chromedriver-mac-x64/chromedriver",
                   "chromedriver-mac-arm64/chromedriver"),
    OsFamily.OTHER: ("chromedriver",),
}

_LOCAL_EDGE_DRIVERS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.WINDOWS: ("msedgedriver.exe", "edgedriver_win64/msedgedriver.exe"),
    OsFamily.LINUX: ("msedgedriver", "edgedriver_linux64/msedgedriver"),
    OsFamily.MAC: ("msedgedriver", "edgedriver_mac64/msedgedriver",
                   "edgedriver_mac64_m1/msedgedriver"),
    OsFamily.OTHER: ("msedgedriver",),
}

SYSTEM_CHROME_DRIVERS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.LINUX: (
        "/usr/bin/chromedriver",
        "/usr/local/bin/chromedriver",
        "/usr/lib/chromium-browser/chromedriver",
        "/usr/lib/chromium/chromedriver",
        "/snap/bin/chromium.chromedriver",
    ),
    OsFamily.MAC: (
        "/opt/homebrew/bin/chromedriver",
        "/usr/local/bin/chromedriver",
    ),
    OsFamily.WINDOWS: (
        r"C:\Program Files\ChromeDriver\chromedriver.exe",
        r"C:\WebDriver\chromedriver.exe",
        r"C:\tools\chromedriver.exe",
    ),
    OsFamily.OTHER: (
        "/usr/local/bin/chromedriver",
        "/usr/bin/chromedriver",
    ),
}

SYSTEM_EDGE_DRIVERS_WINDOWS: tuple[str, ...] = (
    r"C:\Program Files (x86)\Microsoft\Edge\Application\msedgedriver.exe",
    r"C:\Program Files\Microsoft\Edge\Application\msedgedriver.exe",
    r"C:\WebDriver\msedgedriver.exe",
)


def local_driver_names(browser_type: BrowserType, env: Environment) -> tuple[str, ...]:
    """Candidate file names inside the project-local driver folder.

    On ARM hosts the arm64 archive layout is tried before the x64 one.
    """
    table = _LOCAL_EDGE_DRIVERS if browser_type is BrowserType.EDGE else _LOCAL_CHROME_DRIVERS
    names = table[env.os_family]
    if env.is_arm:
        names = tuple(sorted(names, key=lambda n: 0 if ("arm64" in n or "m1" in n) else 1))
    return names


def ensure_executable(path: str) -> bool:
    """Try to add the executable bit to *path*; report whether it is executable.

    A failed chmod is logged, not raised.
    """
    if os.access(path, os.X_OK):
        return True
    try:
        mode = os.stat(path).st_mode
        os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        log.info("Marked driver executable: %s", path)
    except OSError as e:
        log.warning(f"Could not mark driver executable {path}: {e}")
    return os.access(path, os.X_OK)


def _find_local(driver_dir: str, names: tuple[str, ...], searched: list[str]) -> str | None:
    for name in names:
        path = os.path.join(driver_dir, *name.split("/"))
        searched.append(path)
        if not os.path.isfile(path):
            continue
        if ensure_executable(path):
            return os.path.abspath(path)
        log.warning("Skipping non-executable driver candidate %s", path)
    return None


def _find_system(paths: tuple[str, ...], searched: list[str]) -> str | None:
    for path in paths:
        searched.append(path)
        if os.path.isfile(path) and os.access(path, os.X_OK):
            return path
    return None


def resolve_browser_config(
    env: Environment | None = None,
    *,
    driver_dir: str = "driver",
    system_chrome_drivers: tuple[str, ...] | None = None,
    system_edge_drivers: tuple[str, ...] | None = None,
) -> BrowserConfig:
    """Resolve the driver/browser pair to use on this host.

    Raises DriverNotFoundError, listing every path searched, when no tier
    yields an executable driver.
    """
    if env is None:
        env = probe_environment()
    if system_chrome_drivers is None:
        system_chrome_drivers = SYSTEM_CHROME_DRIVERS.get(env.os_family, ())
    if system_edge_drivers is None:
        system_edge_drivers = SYSTEM_EDGE_DRIVERS_WINDOWS

    searched: list[str] = []

    if os.path.isdir(driver_dir):
        edge = _find_local(driver_dir, local_driver_names(BrowserType.EDGE, env), searched)
        if edge:
            log.info("Using project-local Edge driver: %s", edge)
            return BrowserConfig(
                BrowserType.EDGE, edge,
                locate_browser_binary(BrowserType.EDGE, env.os_family, env.is_arm),
            )
        chrome = _find_local(driver_dir, local_driver_names(BrowserType.CHROME, env), searched)
        if chrome:
            log.info("Using project-local Chrome driver: %s", chrome)
            return BrowserConfig(
                BrowserType.CHROME, chrome,
                locate_browser_binary(BrowserType.CHROME, env.os_family, env.is_arm),
            )
    else:
        log.debug("No project-local driver folder at %s", driver_dir)

    chrome = _find_system(system_chrome_drivers, searched)
    if chrome:
        log.info("Using system Chrome driver: %s", chrome)
        return BrowserConfig(
            BrowserType.CHROME, chrome,
            locate_browser_binary(BrowserType.CHROME, env.os_family, env.is_arm),
        )

    if env.os_family is OsFamily.WINDOWS:
        edge = _find_system(system_edge_drivers, searched)
        if edge:
            log.info("Using system Edge driver: %s", edge)
            return BrowserConfig(
                BrowserType.EDGE, edge,
                locate_browser_binary(BrowserType.EDGE, env.os_family, env.is_arm),
            )

    raise DriverNotFoundError(searched)
