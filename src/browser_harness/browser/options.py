"""Browser option sets for disposable headless test sessions."""
import os
import tempfile
import time

from selenium.webdriver import ChromeOptions, EdgeOptions

from .types import BrowserConfig, BrowserType

BASE_ARGS = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-extensions",
    "--remote-allow-origins=*",
    # Local pages loaded via file:// need to reach sibling scripts.
    "--allow-file-access-from-files",
    "--disable-web-security",
)

# Software rendering; ARM hosts commonly lack a usable GPU stack.
ARM_ARGS = (
    "--disable-gpu",
    "--use-gl=swiftshader",
    "--use-angle=swiftshader",
    "--enable-unsafe-swiftshader",
)


def new_profile_dir(browser_type: BrowserType, root: str = "") -> str:
    """Create a fresh user-data directory namespaced by time and pid."""
    root = root or tempfile.gettempdir()
    stamp = int(time.time() * 1000)
    path = os.path.join(root, f"harness-{browser_type.value}-{stamp}-{os.getpid()}")
    os.makedirs(path, exist_ok=True)
    return path


def build_browser_args(*, is_arm: bool, headless: bool = True,
                       window_size: tuple[int, int] = (1920, 1080),
                       profile_dir: str = "") -> list[str]:
    """Command-line switches for the browser, in a stable order."""
    args = []
    if headless:
        args.append("--headless=new")
    args.extend(BASE_ARGS)
    args.append(f"--window-size={window_size[0]},{window_size[1]}")
    if profile_dir:
        args.append(f"--user-data-dir={profile_dir}")
    if is_arm:
        args.extend(ARM_ARGS)
    return args


def build_browser_options(config: BrowserConfig, *, is_arm: bool, headless: bool = True,
                          window_size: tuple[int, int] = (1920, 1080),
                          profile_dir: str = ""):
    """Return ChromeOptions or EdgeOptions for *config*."""
    options = EdgeOptions() if config.browser_type is BrowserType.EDGE else ChromeOptions()
    for arg in build_browser_args(is_arm=is_arm, headless=headless,
                                  window_size=window_size, profile_dir=profile_dir):
        options.add_argument(arg)
    if config.binary_path:
        options.binary_location = config.binary_path
    return options
