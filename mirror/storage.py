# mirror/storage.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional

import requests

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; site-mirror/0.1)"
HEADERS = {"User-Agent": DEFAULT_USER_AGENT}
logger = logging.getLogger(__name__)


def ensure_parent_dirs(path: Path) -> None:
    """
    Best-effort creation of every directory above `path`.
    A failure here is ignored on purpose: the file write that follows fails
    as well and that is the error that gets recorded.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.debug("Could not create %s (%s)", path.parent, exc)


class ContentStore:
    """
    Local cache in front of HTTP. Files already on disk are authoritative:
    they are read instead of fetched and never overwritten.

    `errors` is the list owned by the caller; every failure is appended to it
    as a human readable string.
    """

    def __init__(
        self,
        session: requests.Session,
        timeout_ms: int,
        errors: List[str],
        headers: Optional[dict] = None,
    ) -> None:
        self.session = session
        self.timeout = timeout_ms / 1000.0
        self.errors = errors
        self.headers = headers or HEADERS
        self.fetch_count = 0

    def _record(self, message: str) -> None:
        self.errors.append(message)
        logger.warning(message)

    def get(self, url: str, path: Path) -> bytes:
        """
        Return the content for `url`, from `path` when cached, otherwise
        downloaded. b"" means there is nothing to save or parse.
        """
        if path.is_file():
            data = self.load(path)
            if data:
                logger.debug("Cache hit: %s", path)
                return data
        return self.fetch(url)

    def load(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            self._record(f"Error reading file: {path} - {exc}")
            return b""

    def fetch(self, url: str) -> bytes:
        """
        given a URL, perform a GET request and return the raw body.
        timeouts, connection failures and non-2xx statuses are recorded and
        return b"" (no retries)
        """
        self.fetch_count += 1
        try:
            r = self.session.get(url, headers=self.headers, timeout=self.timeout, allow_redirects=True)
            r.raise_for_status()
            return r.content
        except requests.RequestException as exc:
            self._record(f"Error downloading {url} - {exc}")
            return b""

    def save(self, path: Path, data: bytes) -> bool:
        """Write `data` to `path` unless a file is already there."""
        if path.is_file():
            return False

        ensure_parent_dirs(path)
        try:
            with open(path, "xb") as f: # "x" refuses to clobber a file that appeared meanwhile
                f.write(data)
        except FileExistsError as exc:
            if path.is_file():
                return False
            self._record(f"Error writing local copy: {path} - {exc}")
            return False
        except OSError as exc:
            self._record(f"Error writing local copy: {path} - {exc}")
            return False
        logger.debug("Saved %d bytes to %s", len(data), path)
        return True
