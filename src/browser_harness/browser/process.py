"""Driver process launch, readiness polling, and escalating shutdown."""
import logging
import os
import socket
import subprocess
import time
import urllib.error
import urllib.request

from ..engine.errors import SessionLaunchError

log = logging.getLogger(__name__)


def terminate_process(proc: subprocess.Popen | None, timeout: float = 5) -> None:
    """Terminate *proc*, escalating to kill after *timeout* seconds.

    Never raises; failures are logged.
    """
    if proc is None or proc.poll() is not None:
        return
    try:
        proc.terminate()
        try:
            proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            log.warning("Process %s ignored terminate; killing", proc.pid)
            proc.kill()
            proc.wait(timeout=timeout)
    except Exception as e:
        log.warning(f"Failed to stop process {getattr(proc, 'pid', '?')}: {e}")


def find_free_port() -> int:
    """Ask the OS for a currently unused loopback port."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class DriverProcess:
    """A running driver executable listening on a loopback port.

    Built by :func:`start_driver_process`, which only returns once the
    driver answers ``/status``. ``stop()`` is idempotent.
    """

    def __init__(self, process: subprocess.Popen, port: int, driver_path: str):
        self.process = process
        self.port = port
        self.driver_path = driver_path

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.port}"

    @property
    def running(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def stop(self) -> None:
        if self.process is None:
            return
        terminate_process(self.process)
        self.process = None
        log.debug("Driver process on port %d stopped", self.port)


def start_driver_process(driver_path: str, *, timeout: float = 30.0,
                         poll_interval: float = 0.3, log_path: str = "") -> DriverProcess:
    """Spawn *driver_path* on a free port and wait until it is ready.

    The process is terminated before SessionLaunchError is raised, whether
    it fails to spawn, exits early, or does not answer within *timeout*.
    """
    port = find_free_port()
    args = [driver_path, f"--port={port}"]
    if log_path:
        args.append(f"--log-path={log_path}")

    log.info("Starting driver %s on port %d", os.path.basename(driver_path), port)
    try:
        proc = subprocess.Popen(
            args,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise SessionLaunchError(f"Could not execute driver {driver_path}: {e}") from e

    driver = DriverProcess(proc, port, driver_path)
    status_url = f"{driver.url}/status"
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if proc.poll() is not None:
            raise SessionLaunchError(
                f"Driver exited unexpectedly (code {proc.returncode})"
            )
        try:
            with urllib.request.urlopen(status_url, timeout=1) as resp:
                if resp.status == 200:
                    log.info("Driver ready on port %d", port)
                    return driver
        except (urllib.error.URLError, OSError):
            pass
        time.sleep(poll_interval)

    driver.stop()
    raise SessionLaunchError(f"Driver did not become ready within {timeout:.0f}s")
