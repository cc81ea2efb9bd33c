"""Tests for FailureKind and the harness error taxonomy."""
from browser_harness.engine.errors import (
    ContentNotFoundError,
    DriverNotFoundError,
    FailureKind,
    HarnessError,
    ServerStartError,
    SessionLaunchError,
)


def test_kind_values():
    assert FailureKind.DRIVER_NOT_FOUND.value == "driver_not_found"
    assert FailureKind.CONTENT_NOT_FOUND.value == "content_not_found"
    assert FailureKind.SERVER_START.value == "server_start"
    assert FailureKind.SESSION_LAUNCH.value == "session_launch"


def test_only_server_start_is_recoverable():
    assert not FailureKind.SERVER_START.fatal
    assert FailureKind.DRIVER_NOT_FOUND.fatal
    assert FailureKind.CONTENT_NOT_FOUND.fatal
    assert FailureKind.SESSION_LAUNCH.fatal


def test_harness_error_default_message():
    err = HarnessError(FailureKind.SESSION_LAUNCH)
    assert str(err) == "session_launch"


def test_driver_not_found_lists_searched_paths():
    err = DriverNotFoundError(["driver/chromedriver", "/usr/bin/chromedriver"])
    assert err.kind is FailureKind.DRIVER_NOT_FOUND
    assert err.searched == ["driver/chromedriver", "/usr/bin/chromedriver"]
    assert "/usr/bin/chromedriver" in str(err)


def test_content_not_found_lists_candidates():
    err = ContentNotFoundError(["a/index.html", "b/index.html"])
    assert err.candidates == ["a/index.html", "b/index.html"]
    assert "a/index.html" in str(err)
    assert "b/index.html" in str(err)


def test_subclasses_are_harness_errors():
    for err in (DriverNotFoundError(), ContentNotFoundError(),
                ServerStartError("x"), SessionLaunchError("y")):
        assert isinstance(err, HarnessError)
        assert isinstance(err, Exception)
    assert ServerStartError("port busy").kind is FailureKind.SERVER_START
    assert str(SessionLaunchError("no body")) == "no body"
