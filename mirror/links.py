from __future__ import annotations
import logging
from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from mirror.filters import canonicalize_url, is_in_scope

logger = logging.getLogger(__name__)

def extract_links(base_url: str, data: bytes, scope_url: str, errors: List[str]) -> List[str]:
    """
    Parse `data` as HTML and return every <a href> that, once resolved against
    `base_url`, falls inside the scope of `scope_url`.

    Failures are appended to `errors` and never raised:
    - bytes that are not utf-8 / html that cannot be parsed -> [] for this page
    - an href that cannot be resolved -> that href is skipped

    Duplicates are kept; the frontier drops them.
    """
    try:
        html = data.decode("utf-8")
        soup = BeautifulSoup(html, "html.parser")
        anchors = soup.find_all("a", href=True)
    except Exception as exc: # UnicodeDecodeError, or whatever the tree builder raises
        message = f"Error parsing HTML: {exc}"
        errors.append(message)
        logger.warning(message)
        return []

    links: List[str] = []
    for a in anchors:
        href = a["href"]
        try:
            url = canonicalize_url(urljoin(base_url, href))
        except ValueError as exc:
            message = f"Error parsing href: {href} - {exc}"
            errors.append(message)
            logger.warning(message)
            continue

        if is_in_scope(scope_url, url):
            links.append(url)

    logger.debug("Found %d in-scope links (of %d anchors) on %s", len(links), len(anchors), base_url)
    return links
