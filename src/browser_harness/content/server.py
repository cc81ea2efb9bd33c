"""Short-lived static HTTP server for the page under test.

Serving over http:// instead of file:// keeps the page's local scripts out
of the browser's file-origin restrictions. Callers fall back to a file://
URL when this module raises ServerStartError.
"""
import logging
import os
import random
import subprocess
import sys
import time
import urllib.error
import urllib.parse
import urllib.request

from ..browser.process import terminate_process
from ..engine.errors import ServerStartError

log = logging.getLogger(__name__)

DEFAULT_BASE_PORT = 8000
DEFAULT_PORT_WINDOW = 1000


class ServerHandle:
    """A running content server. ``stop()`` is idempotent and never raises."""

    def __init__(self, process: subprocess.Popen, port: int, directory: str, file_name: str):
        self.process = process
        self.port = port
        self.directory = directory
        self.file_name = file_name

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}/{urllib.parse.quote(self.file_name)}"

    @property
    def running(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def stop(self) -> None:
        stop_content_server(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.stop()


def pick_port(base_port: int = DEFAULT_BASE_PORT, window: int = DEFAULT_PORT_WINDOW) -> int:
    """Pseudo-random port in [base_port, base_port + window)."""
    return random.randrange(base_port, base_port + window)


def probe_ready(url: str, proc: subprocess.Popen | None = None, *,
                attempts: int = 10, interval: float = 1.0) -> bool:
    """HEAD *url* until it answers 200. Only a 200 counts as ready.

    Gives up early if *proc* exits. Makes at most *attempts* requests.
    """
    for attempt in range(1, attempts + 1):
        if proc is not None and proc.poll() is not None:
            log.warning("Content server exited during readiness probe (code %s)", proc.returncode)
            return False
        request = urllib.request.Request(url, method="HEAD")
        try:
            with urllib.request.urlopen(request, timeout=max(interval, 1.0)) as resp:
                if resp.status == 200:
                    log.debug("Content server ready after %d probe(s)", attempt)
                    return True
                log.debug("Probe %d: HTTP %d", attempt, resp.status)
        except urllib.error.HTTPError as e:
            log.debug("Probe %d: HTTP %d", attempt, e.code)
        except (urllib.error.URLError, OSError) as e:
            log.debug("Probe %d failed: %s", attempt, e)
        if attempt < attempts:
            time.sleep(interval)
    return False


def _spawn(runtime: str, directory: str, port: int) -> subprocess.Popen:
    args = [runtime, "-m", "http.server", str(port),
            "--bind", "127.0.0.1", "--directory", directory]
    try:
        return subprocess.Popen(
            args,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise ServerStartError(f"Cannot run content server runtime {runtime!r}: {e}") from e


def start_content_server(
    directory: str,
    file_name: str,
    *,
    runtime: str = "",
    base_port: int = DEFAULT_BASE_PORT,
    port_window: int = DEFAULT_PORT_WINDOW,
    settle_delay: float = 1.0,
    probe_attempts: int = 10,
    probe_interval: float = 1.0,
    bind_attempts: int = 3,
) -> ServerHandle:
    """Serve *directory* on a random port and wait until *file_name* answers 200.

    A process that dies during the settle delay is assumed to have lost a
    port race; a new port is tried up to *bind_attempts* spawns in total.
    On any failure the process is already stopped when ServerStartError is
    raised.
    """
    runtime = runtime or sys.executable
    if not runtime:
        raise ServerStartError("No runtime available to run the content server")
    directory = os.path.abspath(directory)

    for bind_attempt in range(1, bind_attempts + 1):
        port = pick_port(base_port, port_window)
        log.info("Starting content server for %s on port %d", directory, port)
        proc = _spawn(runtime, directory, port)
        handle = ServerHandle(proc, port, directory, file_name)
        try:
            time.sleep(settle_delay)
            if proc.poll() is not None:
                log.warning(
                    "Content server exited on port %d (code %s), attempt %d/%d",
                    port, proc.returncode, bind_attempt, bind_attempts,
                )
                handle.stop()
                continue
            if probe_ready(handle.url, proc, attempts=probe_attempts, interval=probe_interval):
                log.info("Content server ready at %s", handle.url)
                return handle
            raise ServerStartError(f"Content server at {handle.url} never answered HTTP 200")
        except ServerStartError:
            handle.stop()
            raise
        except Exception as e:
            handle.stop()
            raise ServerStartError(f"Content server on port {port} failed: {e}") from e
        except BaseException:
            handle.stop()
            raise

    raise ServerStartError(f"Content server exited on startup after {bind_attempts} attempt(s)")


def stop_content_server(handle: ServerHandle | None) -> None:
    """Stop *handle*'s process. Never raises."""
    if handle is None or handle.process is None:
        return
    try:
        terminate_process(handle.process)
        log.info("Content server on port %d stopped", handle.port)
    except Exception as e:
        log.warning(f"Failed to stop content server on port {handle.port}: {e}")
    finally:
        handle.process = None
