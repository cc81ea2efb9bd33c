"""browser — host probing, driver/binary discovery, options, driver process.

Filesystem probing only; nothing is downloaded.
"""
from .host import Environment, OsFamily, classify_platform, probe_environment  # noqa: F401
from .types import BrowserConfig, BrowserType  # noqa: F401
from .binaries import locate_browser_binary  # noqa: F401
from .drivers import resolve_browser_config  # noqa: F401
from .options import build_browser_args, build_browser_options, new_profile_dir  # noqa: F401
from .process import DriverProcess, start_driver_process, terminate_process  # noqa: F401
