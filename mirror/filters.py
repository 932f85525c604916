from __future__ import annotations #annotations postpone the evaluation of annotations
from urllib.parse import urlsplit, urlunsplit

# only these schemes can be fetched and mirrored
ALLOWED_SCHEMES = {"http", "https"}
DEFAULT_PORTS = {"http": 80, "https": 443}

def canonicalize_url(url: str) -> str:
    """
    Normalize the URL so the frontier never holds the same resource twice
    - we remove fragments, drop default ports and normalize the scheme/host casing
    - the query string is part of the resource, so it is kept as-is

    examples

    # canonicalized to the same entry:
    http://Example.TEST:80/about
    http://example.test/about#team

    # parsed:
    url = "HTTP://Example.TEST:80/docs/api?b=2&a=1#intro"
    p.scheme   → "HTTP"
    p.netloc   → "Example.TEST:80"
    p.path     → "/docs/api"
    p.query    → "b=2&a=1"
    p.fragment → "intro"

    """
    p = urlsplit(url.strip()) #splits into components above
    scheme = p.scheme.lower()
    host = (p.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]" # ipv6 literal

    netloc = host
    if p.port is not None and p.port != DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{p.port}"
    if p.username:
        userinfo = p.username + (f":{p.password}" if p.password else "")
        netloc = f"{userinfo}@{netloc}"

    path = p.path or "/"

    # correct format: (scheme, netloc, path, query, fragment)
    return urlunsplit((scheme, netloc, path, p.query, ""))


def is_valid_seed(url: str) -> bool:
    try:
        p = urlsplit(url)
        p.port # raises on a bad port
        return p.scheme.lower() in ALLOWED_SCHEMES and bool(p.hostname)
    except ValueError:
        return False


def _origin(url: str) -> tuple[str, str, int | None]:
    p = urlsplit(url)
    scheme = p.scheme.lower()
    return scheme, (p.hostname or "").lower(), p.port or DEFAULT_PORTS.get(scheme)


def is_in_scope(base_url: str, url: str) -> bool:
    """
    True when `base_url` is a base of `url`: same scheme, host and port, and
    the path of `url` sits under the directory part of the base path.

    base "https://a.com/x/"     → "https://a.com/x/z" yes, "https://a.com/y" no
    base "https://a.com/x/page" → directory part is "/x/", so "https://a.com/x/other" yes
    """
    try:
        base_origin, origin = _origin(base_url), _origin(url)
    except ValueError: # bad port and friends
        return False

    if origin[0] not in ALLOWED_SCHEMES or origin != base_origin:
        return False

    base_path = urlsplit(base_url).path or "/"
    prefix = base_path[: base_path.rfind("/") + 1]
    return (urlsplit(url).path or "/").startswith(prefix)
