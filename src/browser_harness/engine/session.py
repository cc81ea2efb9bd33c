"""Browser session lifecycle for a single test.

A HarnessSession owns everything one test needs: the resolved driver, an
optional content server, the driver process, the WebDriver client, and an
isolated profile directory. ``setup()`` either reaches READY or tears down
whatever it built before raising; ``teardown()`` never raises and is a
no-op once CLOSED.
"""
import logging
import os
import shutil
import time
from contextlib import contextmanager
from enum import Enum
from pathlib import Path

from selenium import webdriver
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..browser.drivers import resolve_browser_config
from ..browser.host import probe_environment
from ..browser.options import build_browser_options, new_profile_dir
from ..browser.process import start_driver_process
from ..config import HarnessConfig
from ..content.locator import locate_content
from ..content.server import start_content_server, stop_content_server
from ..telemetry.logger import SessionEventLogger
from .errors import HarnessError, ServerStartError, SessionLaunchError

log = logging.getLogger(__name__)


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    ENVIRONMENT_PROBED = "environment_probed"
    DRIVER_RESOLVED = "driver_resolved"
    SERVER_STARTING = "server_starting"
    CONTENT_READY = "content_ready"
    BROWSER_LAUNCHING = "browser_launching"
    READY = "ready"
    TEARING_DOWN = "tearing_down"
    CLOSED = "closed"


def attach_client(command_executor: str, options):
    """Open a WebDriver session against an already running driver."""
    return webdriver.Remote(command_executor=command_executor, options=options)


class HarnessSession:
    """One disposable browser session, scoped to one test."""

    def __init__(self, config: HarnessConfig | None = None, *, test_name: str | None = None):
        self.config = config or HarnessConfig()
        self.state = SessionState.UNINITIALIZED
        self.session_id = f"{int(time.time() * 1000)}-{os.getpid()}"
        self.environment = None
        self.browser_config = None
        self.content_path: Path | None = None
        self.url: str | None = None
        self.server = None
        self.driver_process = None
        self.driver = None
        self.profile_dir: str | None = None
        self._events = SessionEventLogger(self.session_id, self.config.event_log_dir or None, test_name)

    def __enter__(self):
        return self.setup()

    def __exit__(self, *exc):
        self.teardown()

    @property
    def served(self) -> bool:
        """True when the page is served over HTTP rather than file://."""
        return self.server is not None

    def _advance(self, state: SessionState):
        log.debug("Session %s: %s -> %s", self.session_id, self.state.value, state.value)
        self._events.log_transition(self.state.value, state.value)
        self.state = state

    # ── Setup ───────────────────────────────────────────────────────────────

    def setup(self) -> "HarnessSession":
        """Build the session up to READY.

        Harness errors propagate unchanged; anything else is wrapped in
        SessionLaunchError. Either way teardown has run first.
        """
        if self.state is not SessionState.UNINITIALIZED:
            raise RuntimeError(f"setup() called in state {self.state.value}")
        try:
            self._build()
        except HarnessError as e:
            self._abort(e)
            raise
        except Exception as e:
            self._abort(e)
            raise SessionLaunchError(f"Session setup failed: {e}") from e
        except BaseException as e:
            self._abort(e)
            raise
        return self

    def _abort(self, error: BaseException):
        log.error(f"Session setup failed in state {self.state.value}: {error}")
        self._events.log_setup_failed(self.state.value, error)
        self.teardown()

    def _build(self):
        cfg = self.config

        self.environment = probe_environment()
        self._advance(SessionState.ENVIRONMENT_PROBED)

        self.browser_config = resolve_browser_config(self.environment, driver_dir=cfg.driver_dir)
        self._events.log_browser_resolved(
            self.browser_config.browser_type.value,
            self.browser_config.driver_path,
            self.browser_config.binary_path,
            self.environment.os_family.value,
            self.environment.is_arm,
        )
        self._advance(SessionState.DRIVER_RESOLVED)

        self._advance(SessionState.SERVER_STARTING)
        self.content_path = locate_content(cfg.content_candidates, cfg.content_root or None)
        self.url = self._content_url(self.content_path)
        self._advance(SessionState.CONTENT_READY)

        self._advance(SessionState.BROWSER_LAUNCHING)
        self.profile_dir = new_profile_dir(self.browser_config.browser_type, cfg.profile_root)
        options = build_browser_options(
            self.browser_config,
            is_arm=self.environment.is_arm,
            headless=cfg.headless,
            window_size=cfg.window_size,
            profile_dir=self.profile_dir,
        )
        self.driver_process = start_driver_process(
            self.browser_config.driver_path,
            timeout=cfg.driver_start_timeout,
            log_path=cfg.driver_log_path,
        )
        self.driver = attach_client(self.driver_process.url, options)
        self.driver.set_page_load_timeout(cfg.page_load_timeout)
        self.driver.implicitly_wait(cfg.implicit_wait)

        log.info("Opening %s", self.url)
        self.driver.get(self.url)
        WebDriverWait(self.driver, cfg.page_load_timeout).until(
            EC.presence_of_element_located(tuple(cfg.ready_marker))
        )
        self._advance(SessionState.READY)
        log.info("Session %s ready (%s)", self.session_id, self.browser_config.browser_type.value)

    def _content_url(self, path: Path) -> str:
        cfg = self.config
        file_url = path.resolve().as_uri()
        if not cfg.serve_over_http:
            self._events.log_content(file_url, served=False, fallback_reason="disabled")
            return file_url
        try:
            self.server = start_content_server(
                str(path.parent), path.name,
                runtime=cfg.server_runtime,
                base_port=cfg.base_port,
                port_window=cfg.port_window,
                settle_delay=cfg.server_settle_delay,
                probe_attempts=cfg.server_probe_attempts,
                probe_interval=cfg.server_probe_interval,
                bind_attempts=cfg.server_bind_attempts,
            )
        except ServerStartError as e:
            log.warning(f"Content server unavailable ({e}); falling back to {file_url}")
            self._events.log_content(file_url, served=False, fallback_reason=str(e))
            return file_url
        self._events.log_content(self.server.url, served=True)
        return self.server.url

    # ── Teardown ────────────────────────────────────────────────────────────

    def teardown(self) -> None:
        """Release every resource this session created. Never raises."""
        if self.state is SessionState.CLOSED:
            return
        self._advance(SessionState.TEARING_DOWN)
        self._teardown_step("content_server", self._stop_server)
        self._teardown_step("browser_client", self._quit_client)
        self._teardown_step("driver_process", self._stop_driver)
        if not self.config.keep_profile:
            self._teardown_step("profile_dir", self._remove_profile)
        self._advance(SessionState.CLOSED)
        self._events.close()

    def _teardown_step(self, name: str, step):
        try:
            step()
        except Exception as e:
            log.warning(f"Teardown step {name} failed: {e}")
            self._events.log_teardown_step(name, ok=False, error=str(e))
        else:
            self._events.log_teardown_step(name, ok=True)

    def _stop_server(self):
        server, self.server = self.server, None
        stop_content_server(server)

    def _quit_client(self):
        driver, self.driver = self.driver, None
        if driver is not None:
            driver.quit()

    def _stop_driver(self):
        driver_process, self.driver_process = self.driver_process, None
        if driver_process is not None:
            driver_process.stop()

    def _remove_profile(self):
        profile_dir, self.profile_dir = self.profile_dir, None
        if profile_dir and os.path.isdir(profile_dir):
            shutil.rmtree(profile_dir)

    # ── DOM surface for test bodies ─────────────────────────────────────────

    def _require_ready(self):
        if self.state is not SessionState.READY or self.driver is None:
            raise RuntimeError(f"Session is not ready (state: {self.state.value})")
        return self.driver

    def find_by_id(self, element_id: str):
        return self._require_ready().find_element(By.ID, element_id)

    def find_by_xpath(self, expression: str):
        return self._require_ready().find_element(By.XPATH, expression)

    def wait_for_element(self, locator: tuple[str, str], timeout: float | None = None):
        """Block until *locator* is present; defaults to the implicit-wait bound."""
        driver = self._require_ready()
        wait = WebDriverWait(driver, self.config.implicit_wait if timeout is None else timeout)
        return wait.until(EC.presence_of_element_located(locator))

    def click(self, element_id: str) -> None:
        self.find_by_id(element_id).click()

    def text_of(self, locator: tuple[str, str]) -> str:
        return self._require_ready().find_element(*locator).text


@contextmanager
def open_session(config: HarnessConfig | None = None, *, test_name: str | None = None):
    """Yield a READY HarnessSession and tear it down on exit."""
    session = HarnessSession(config, test_name=test_name)
    session.setup()
    try:
        yield session
    finally:
        session.teardown()
