"""Tests for SessionEventLogger — telemetry contract tests."""
import json
import os
import tempfile

from browser_harness.telemetry.logger import SessionEventLogger


def test_basic_event_logging():
    """Events are written to JSONL with correct fields."""
    with tempfile.TemporaryDirectory() as tmpdir:
        logger = SessionEventLogger("sess123", log_dir=tmpdir)
        logger.log_transition("uninitialized", "environment_probed")
        logger.close()

        files = os.listdir(tmpdir)
        assert len(files) == 1
        assert files[0].endswith(".jsonl")

        with open(os.path.join(tmpdir, files[0])) as f:
            lines = f.readlines()
        assert len(lines) == 1

        event = json.loads(lines[0])
        assert event["event"] == "transition"
        assert event["session_id"] == "sess123"
        assert event["from"] == "uninitialized"
        assert event["to"] == "environment_probed"
        assert "ts" in event


def test_test_name_included_when_provided():
    with tempfile.TemporaryDirectory() as tmpdir:
        logger = SessionEventLogger("s1", log_dir=tmpdir, test_name="tests/test_x.py::test_on")
        logger.log_content("http://localhost:8123/index.html", served=True)
        logger.close()

        files = os.listdir(tmpdir)
        with open(os.path.join(tmpdir, files[0])) as f:
            event = json.loads(f.readline())
        assert event["test"] == "tests/test_x.py::test_on"
        assert event["served"] is True


def test_test_name_omitted_when_not_provided():
    with tempfile.TemporaryDirectory() as tmpdir:
        logger = SessionEventLogger("s2", log_dir=tmpdir)
        logger.log_content("file:///tmp/index.html", served=False, fallback_reason="no runtime")
        logger.close()

        files = os.listdir(tmpdir)
        with open(os.path.join(tmpdir, files[0])) as f:
            event = json.loads(f.readline())
        assert "test" not in event
        assert event["fallback_reason"] == "no runtime"


def test_no_log_dir_is_noop():
    """Without a log_dir nothing is written and nothing raises."""
    logger = SessionEventLogger("s3")
    logger.log_transition("ready", "tearing_down")
    logger.log_teardown_step("browser_client", ok=False, error="boom")
    logger.close()


def test_unwritable_dir_never_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    logger = SessionEventLogger("s4", log_dir=str(blocker / "sub"))
    logger.log_transition("a", "b")
    logger.close()


def test_context_manager():
    """SessionEventLogger works as context manager."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with SessionEventLogger("cm", log_dir=tmpdir) as logger:
            logger.log_transition("a", "b")
        files = os.listdir(tmpdir)
        assert len(files) == 1


def test_golden_roundtrip():
    """Write a full lifecycle, read back, verify structure."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with SessionEventLogger("golden", log_dir=tmpdir) as logger:
            logger.log_transition("uninitialized", "environment_probed")
            logger.log_browser_resolved("chrome", "/usr/bin/chromedriver", None, "linux", False)
            logger.log_content("http://localhost:8123/index.html", served=True)
            logger.log_setup_failed("browser_launching", RuntimeError("driver crashed"))
            logger.log_teardown_step("content_server", ok=True)

        files = os.listdir(tmpdir)
        with open(os.path.join(tmpdir, files[0])) as f:
            events = [json.loads(line) for line in f]

        assert [e["event"] for e in events] == [
            "transition", "browser_resolved", "content", "setup_failed", "teardown_step",
        ]
        assert events[1]["binary_path"] is None
        assert events[3]["error_type"] == "RuntimeError"
        assert events[3]["error"] == "driver crashed"
        for e in events:
            assert e["session_id"] == "golden"
            assert "ts" in e
