"""Structured JSONL event logging for harness sessions."""
import json
import logging
import os
import time

log = logging.getLogger(__name__)


class SessionEventLogger:
    """Writes one JSON line per lifecycle event to a per-session JSONL file.

    All logging is best-effort — methods never raise exceptions.
    Supports context-manager protocol for automatic close.

    With no ``log_dir`` the logger is a no-op.
    """

    def __init__(self, session_id: str, log_dir: str | None = None, test_name: str | None = None):
        self._session_id = session_id
        self._test_name = test_name
        self._f = None
        if not log_dir:
            return
        try:
            os.makedirs(log_dir, exist_ok=True)
            path = os.path.join(log_dir, f"session_{session_id}.jsonl")
            self._f = open(path, "a", encoding="utf-8")
        except Exception as e:
            log.warning(f"SessionEventLogger: failed to open log file: {e}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _write(self, event: dict):
        if self._f is None:
            return
        try:
            event["ts"] = time.time()
            event["session_id"] = self._session_id
            if self._test_name is not None:
                event["test"] = self._test_name
            self._f.write(json.dumps(event, ensure_ascii=False, default=str) + "\n")
            self._f.flush()
        except Exception as e:
            log.warning(f"SessionEventLogger: write failed: {e}")

    def log_transition(self, from_state: str, to_state: str):
        self._write({
            "event": "transition",
            "from": from_state,
            "to": to_state,
        })

    def log_browser_resolved(self, browser_type: str, driver_path: str, binary_path: str | None,
                             os_family: str, is_arm: bool):
        self._write({
            "event": "browser_resolved",
            "browser_type": browser_type,
            "driver_path": driver_path,
            "binary_path": binary_path,
            "os_family": os_family,
            "is_arm": is_arm,
        })

    def log_content(self, url: str, served: bool, fallback_reason: str | None = None):
        """Log the URL handed to the browser.

        ``served`` is False when the file:// fallback was used.
        """
        self._write({
            "event": "content",
            "url": url,
            "served": served,
            "fallback_reason": fallback_reason,
        })

    def log_setup_failed(self, state: str, error: BaseException):
        self._write({
            "event": "setup_failed",
            "state": state,
            "error_type": type(error).__name__,
            "error": str(error),
        })

    def log_teardown_step(self, step: str, ok: bool, error: str | None = None):
        self._write({
            "event": "teardown_step",
            "step": step,
            "ok": ok,
            "error": error,
        })

    def close(self):
        if self._f is not None:
            try:
                self._f.flush()
                self._f.close()
            except Exception as e:
                log.debug(f"SessionEventLogger: close failed: {e}")
            self._f = None
