from __future__ import annotations

import pytest
import requests


class FakeResponse:
    def __init__(self, url: str, status_code: int = 200, content: bytes = b"") -> None:
        self.url = url
        self.status_code = status_code
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error for url: {self.url}", response=self)


class FakeSession:
    """Stands in for requests.Session: serves a fixed site and records every GET."""

    def __init__(self, pages: dict | None = None) -> None:
        self.pages = dict(pages or {})
        self.calls: list[str] = []
        self.timeouts: list[float] = []
        self.closed = False

    def get(self, url, headers=None, timeout=None, allow_redirects=True):
        self.calls.append(url)
        self.timeouts.append(timeout)
        page = self.pages.get(url)
        if page is None:
            return FakeResponse(url, 404)
        if isinstance(page, Exception):
            raise page
        if isinstance(page, tuple):
            status, body = page
            return FakeResponse(url, status, body)
        return FakeResponse(url, 200, page)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def example_site():
    return {
        "http://example.test/": (
            b'<html><body>'
            b'<a href="/about">About</a>'
            b'<a href="http://other.test/">Elsewhere</a>'
            b'<a href="/about">About again</a>'
            b'</body></html>'
        ),
        "http://example.test/about": b"<html><body><p>About us</p></body></html>",
    }
