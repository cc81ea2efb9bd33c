"""Harness configuration.

Defaults live on :class:`HarnessConfig`; ``from_env`` layers a ``.env``
file and ``HARNESS_*`` environment variables on top.
"""
import logging
import os
from dataclasses import dataclass, fields, replace

from dotenv import load_dotenv

from .content.locator import DEFAULT_CONTENT_CANDIDATES

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HarnessConfig:
    # Driver discovery
    driver_dir: str = "driver"
    # Content
    content_candidates: tuple[str, ...] = DEFAULT_CONTENT_CANDIDATES
    content_root: str = ""
    serve_over_http: bool = True
    server_runtime: str = ""
    base_port: int = 8000
    port_window: int = 1000
    server_settle_delay: float = 1.0
    server_probe_attempts: int = 10
    server_probe_interval: float = 1.0
    server_bind_attempts: int = 3
    # Browser
    headless: bool = True
    window_size: tuple[int, int] = (1920, 1080)
    profile_root: str = ""
    keep_profile: bool = False
    driver_start_timeout: float = 30.0
    page_load_timeout: float = 60.0
    implicit_wait: float = 10.0
    ready_marker: tuple[str, str] = ("tag name", "body")
    # Telemetry
    event_log_dir: str = ""
    driver_log_path: str = ""

    @classmethod
    def from_env(cls, prefix: str = "HARNESS_", dotenv_path: str | None = None,
                 environ=None, **overrides) -> "HarnessConfig":
        """Build a config from defaults, ``.env``, the environment, then *overrides*.

        ``HARNESS_PAGE_LOAD_TIMEOUT=30`` sets ``page_load_timeout``. Tuple
        fields take comma-separated values. Raises ValueError naming the
        variable when a value does not parse.
        """
        if environ is None:
            load_dotenv(dotenv_path)
            environ = os.environ

        values = {}
        for f in fields(cls):
            name = prefix + f.name.upper()
            raw = environ.get(name)
            if raw is None or raw == "":
                continue
            try:
                values[f.name] = _parse(raw, getattr(cls, f.name))
            except ValueError as e:
                raise ValueError(f"Invalid value for {name}: {raw!r} ({e})") from e
        values.update(overrides)
        config = replace(cls(), **values)
        log.debug("Harness config: %s", config)
        return config


def _parse(raw: str, default):
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError("expected a boolean")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    if isinstance(default, tuple):
        parts = tuple(p.strip() for p in raw.split(",") if p.strip())
        if default and isinstance(default[0], int):
            return tuple(int(p) for p in parts)
        return parts
    return raw
