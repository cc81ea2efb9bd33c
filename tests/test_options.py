"""Tests for browser option sets."""
import os

from selenium.webdriver import ChromeOptions, EdgeOptions

from browser_harness.browser.options import (
    ARM_ARGS,
    build_browser_args,
    build_browser_options,
    new_profile_dir,
)
from browser_harness.browser.types import BrowserConfig, BrowserType


def test_baseline_args():
    args = build_browser_args(is_arm=False, profile_dir="/tmp/p")
    assert "--headless=new" in args
    assert "--no-sandbox" in args
    assert "--disable-dev-shm-usage" in args
    assert "--disable-extensions" in args
    assert "--window-size=1920,1080" in args
    assert "--user-data-dir=/tmp/p" in args


def test_arm_flags_only_on_arm():
    arm = build_browser_args(is_arm=True)
    plain = build_browser_args(is_arm=False)
    for flag in ARM_ARGS:
        assert flag in arm
        assert flag not in plain


def test_headed_and_window_size():
    args = build_browser_args(is_arm=False, headless=False, window_size=(800, 600))
    assert not any(a.startswith("--headless") for a in args)
    assert "--window-size=800,600" in args


def test_chrome_options_with_binary():
    config = BrowserConfig(BrowserType.CHROME, "/usr/bin/chromedriver", "/usr/bin/chromium")
    options = build_browser_options(config, is_arm=True)
    assert isinstance(options, ChromeOptions)
    assert options.binary_location == "/usr/bin/chromium"
    assert "--use-gl=swiftshader" in options.arguments


def test_edge_options_without_binary():
    config = BrowserConfig(BrowserType.EDGE, "/usr/bin/msedgedriver")
    options = build_browser_options(config, is_arm=False)
    assert isinstance(options, EdgeOptions)
    assert not options.binary_location
    assert "--disable-gpu" not in options.arguments


def test_profile_dirs_are_fresh(tmp_path):
    path = new_profile_dir(BrowserType.CHROME, str(tmp_path))
    assert os.path.isdir(path)
    assert os.path.basename(path).startswith("harness-chrome-")
    assert str(os.getpid()) in os.path.basename(path)
