from __future__ import annotations
import os
from pathlib import Path
from urllib.parse import urlsplit

LOCAL_COPIES_DIR = "local-copies"
INDEX_FILENAME = "index.html"

# characters that are unsafe (or ambiguous) inside a single path segment
_UNSAFE_CHARS = str.maketrans({c: "-" for c in ":/\\%@\t\n\r"})

def clean_segment(segment: str) -> str:
    return segment.translate(_UNSAFE_CHARS).strip()

def map_path(url: str, storage_root: str | os.PathLike) -> Path:
    """
    Map a URL to storage_root / local-copies / host / ... / filename.

    - "http://example.test/"          -> local-copies/example.test/index.html
    - "http://example.test/docs/"     -> local-copies/example.test/docs/index.html
    - "http://example.test/docs/a.js" -> local-copies/example.test/docs/a.js
    - "http://example.test/about"     -> local-copies/example.test/about

    Pure: nothing is created on disk. Query strings are ignored, so two URLs
    that only differ by query (or whose segments sanitize to the same text)
    share a path; whichever is saved first wins.
    """
    p = urlsplit(url)
    host = clean_segment(p.hostname or "") or "unknown-host"
    base = Path(storage_root) / LOCAL_COPIES_DIR / host

    # dot segments are already collapsed for resolved links; never let one climb out of base
    segments = [clean_segment(s) for s in p.path.split("/") if s]
    segments = [s for s in segments if s not in ("", ".", "..")]

    if p.path.endswith("/") or not segments:
        return base.joinpath(*segments, INDEX_FILENAME)
    return base.joinpath(*segments)
