# mirror/frontier.py
from __future__ import annotations
from typing import Iterator, List, Optional

from mirror.filters import canonicalize_url


# NOTE: entries are never removed, the cursor only moves forward. The full list
# is what ends up in the scan report.
class Frontier:
    """FIFO queue of URLs to visit plus the set of every URL ever seen."""

    def __init__(self, seed: Optional[str] = None) -> None:
        self._entries: List[str] = []
        self._seen: set[str] = set()
        self._cursor = 0
        if seed is not None:
            self.enqueue(seed)

    def enqueue(self, url: str) -> bool:
        """Append `url` unless its normalized form was seen before."""
        url = canonicalize_url(url)
        if url in self._seen:
            return False
        self._seen.add(url)
        self._entries.append(url)
        return True

    def next(self) -> Optional[str]:
        """Return the next unvisited entry, or None once the queue is drained."""
        if self._cursor >= len(self._entries):
            return None
        url = self._entries[self._cursor]
        self._cursor += 1
        return url

    @property
    def position(self) -> int:
        return self._cursor

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def exhausted(self) -> bool:
        return self._cursor >= len(self._entries)

    def __contains__(self, url: str) -> bool:
        return canonicalize_url(url) in self._seen

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)
