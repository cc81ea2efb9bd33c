"""Tests for browser binary discovery."""
from browser_harness.browser import binaries
from browser_harness.browser.binaries import binary_candidates, locate_browser_binary
from browser_harness.browser.host import OsFamily
from browser_harness.browser.types import BrowserType


def test_candidates_are_os_specific():
    linux = binary_candidates(BrowserType.CHROME, OsFamily.LINUX, False)
    windows = binary_candidates(BrowserType.CHROME, OsFamily.WINDOWS, False)
    assert "/usr/bin/chromium-browser" in linux
    assert all(c.endswith(".exe") for c in windows)


def test_arm_linux_skips_google_chrome():
    arm = binary_candidates(BrowserType.CHROME, OsFamily.LINUX, True)
    assert arm
    assert not any("google" in c for c in arm)
    assert arm[0] == "/usr/bin/chromium-browser"


def test_unknown_os_has_no_candidates():
    assert binary_candidates(BrowserType.EDGE, OsFamily.OTHER, False) == []


def test_first_existing_wins(tmp_path, monkeypatch):
    first = tmp_path / "chromium"
    second = tmp_path / "chrome"
    second.write_text("")
    first.write_text("")
    monkeypatch.setitem(binaries.CHROME_BINARIES, OsFamily.LINUX,
                        (str(tmp_path / "missing"), str(first), str(second)))
    assert locate_browser_binary(BrowserType.CHROME, OsFamily.LINUX) == str(first)


def test_none_when_nothing_exists(tmp_path, monkeypatch):
    monkeypatch.setitem(binaries.EDGE_BINARIES, OsFamily.LINUX, (str(tmp_path / "msedge"),))
    assert locate_browser_binary(BrowserType.EDGE, OsFamily.LINUX) is None
