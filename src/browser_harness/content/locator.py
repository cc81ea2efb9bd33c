"""Locate the HTML artifact under test."""
import logging
from pathlib import Path

from ..engine.errors import ContentNotFoundError

log = logging.getLogger(__name__)

DEFAULT_CONTENT_CANDIDATES = (
    "src/main/index.html",
    "index.html",
    "public/index.html",
    "static/index.html",
)


def locate_content(candidates=DEFAULT_CONTENT_CANDIDATES, root: str | Path | None = None) -> Path:
    """Return the first candidate that exists, resolved against *root* (default: cwd)."""
    base = Path(root) if root is not None else Path.cwd()
    tried = []
    for candidate in candidates:
        path = base / candidate
        tried.append(str(path))
        if path.is_file():
            log.debug("Found test content at %s", path)
            return path.resolve()
    raise ContentNotFoundError(tried)
