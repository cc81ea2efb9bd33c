"""Host OS family and CPU architecture detection."""
import functools
import platform
from dataclasses import dataclass
from enum import Enum


class OsFamily(Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    MAC = "mac"
    OTHER = "other"


@dataclass(frozen=True)
class Environment:
    os_family: OsFamily
    is_arm: bool


def classify_platform(system: str, machine: str) -> Environment:
    """Map raw platform strings to an Environment.

    Matching is case-insensitive substring matching. "darwin" contains
    "win", so mac is checked before windows.
    """
    system = (system or "").lower()
    machine = (machine or "").lower()

    if "mac" in system or "darwin" in system:
        os_family = OsFamily.MAC
    elif "win" in system:
        os_family = OsFamily.WINDOWS
    elif "nux" in system or "linux" in system:
        os_family = OsFamily.LINUX
    else:
        os_family = OsFamily.OTHER

    is_arm = "aarch64" in machine or "arm" in machine
    return Environment(os_family=os_family, is_arm=is_arm)


@functools.lru_cache(maxsize=1)
def probe_environment() -> Environment:
    """Return the Environment of the running process (computed once)."""
    return classify_platform(platform.system(), platform.machine())
