from __future__ import annotations
import enum
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

import requests

from mirror.config import ConfigError, InvalidSeedError
from mirror.filters import canonicalize_url, is_valid_seed
from mirror.frontier import Frontier
from mirror.links import extract_links
from mirror.paths import map_path
from mirror.storage import DEFAULT_USER_AGENT, ContentStore

logger = logging.getLogger(__name__)

def configure_logging(verbose: bool = False) -> None:
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(message)s")


class CrawlState(enum.Enum):
    NOT_STARTED = "not-started"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class ScanRecord:
    """Everything one run produced: timing, every enqueued URL and every error."""
    start: datetime
    end: Optional[datetime] = None
    queue: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def duration(self) -> timedelta:
        return (self.end or datetime.now().astimezone()) - self.start


class CrawlEngine:
    """
    Mirrors everything under `seed` into `storage_root`, one URL at a time:
    next url -> load or download -> save -> extract links -> enqueue.

    All run state (frontier, errors, record) lives on the instance; the
    components only see what they are handed.
    """

    def __init__(
        self,
        seed: str,
        storage_root: str | os.PathLike,
        timeout_ms: int = 5000,
        session: Optional[requests.Session] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        if not seed or not is_valid_seed(seed):
            raise InvalidSeedError(f"'{seed}' is not an absolute http(s) URL.")
        if not os.path.isdir(storage_root):
            raise ConfigError(f"The specified path '{storage_root}' does not exist.")
        if timeout_ms <= 0:
            raise ConfigError(f"Timeout must be a positive number of milliseconds, got {timeout_ms}.")

        self.seed = canonicalize_url(seed)
        self.storage_root = Path(storage_root)
        self.state = CrawlState.NOT_STARTED
        self.frontier = Frontier(self.seed)
        self.errors: List[str] = []
        self.record: Optional[ScanRecord] = None

        self._owns_session = session is None
        self.session = session or requests.Session()
        self.store = ContentStore(self.session, timeout_ms, self.errors, headers={"User-Agent": user_agent})

    def run(self) -> ScanRecord:
        if self.state is not CrawlState.NOT_STARTED:
            raise RuntimeError(f"Crawl already {self.state.value}")

        self.state = CrawlState.RUNNING
        self.record = ScanRecord(start=datetime.now().astimezone(), errors=self.errors)
        logger.info("Mirroring %s into %s", self.seed, self.storage_root)

        try:
            while True:
                url = self.frontier.next()
                if url is None:
                    break
                self.scan(url)
        finally:
            if self._owns_session:
                self.session.close()

        self.record.end = datetime.now().astimezone()
        self.record.queue = self.frontier.entries
        self.state = CrawlState.FINISHED
        logger.info("Scanned %d urls with %d errors in %s", len(self.record.queue), len(self.errors), self.record.duration)
        return self.record

    def scan(self, url: str) -> None:
        """Process a single URL end-to-end."""
        logger.info("[%d/%d] Scanning: %s", self.frontier.position, len(self.frontier), url)

        path = map_path(url, self.storage_root)
        data = self.store.get(url, path)
        if not data:
            return

        self.store.save(path, data)

        added = 0
        for link in extract_links(url, data, self.seed, self.errors):
            if self.frontier.enqueue(link):
                added += 1
        if added:
            logger.debug("Queued %d new urls from %s", added, url)
