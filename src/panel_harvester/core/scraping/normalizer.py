"""URL normalizer utilities.

Functions to clean asset URLs pulled out of page bodies: JSON escaping,
protocol-relative forms and tracking params.
"""

from __future__ import annotations

from typing import Iterable
from urllib.parse import ParseResult, parse_qsl, urlencode, urlparse, urlunparse

DEFAULT_REMOVE_PARAMS = {
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "fbclid",
}


def absolutize_protocol(url: str, scheme: str = "https") -> str:
    """`//cdn.example/x.jpg` -> `https://cdn.example/x.jpg`; other URLs unchanged."""
    url = url.strip()
    if url.startswith("//"):
        return f"{scheme}:{url}"
    return url


def unescape_url(url: str) -> str:
    """Undo JSON escaping as found in inline scripts (`https:\\/\\/...`)."""
    return url.replace("\\", "")


def normalize_url(
    url: str, remove_params: Iterable[str] | None = None, strip_fragment: bool = True
) -> str:
    """Return a normalized URL: absolute scheme, cleaned query, no fragment.

    Only common tracking params are removed; CDN signatures and size params
    are kept since they are part of the asset address.
    """
    url = absolutize_protocol(unescape_url(url))
    remove = set(remove_params or DEFAULT_REMOVE_PARAMS)
    p: ParseResult = urlparse(url)
    q = [
        (k, v) for k, v in parse_qsl(p.query, keep_blank_values=True) if k not in remove
    ]
    query = urlencode(q, doseq=True)
    fragment = "" if strip_fragment else p.fragment
    cleaned = urlunparse(
        (p.scheme, p.netloc, p.path or "", p.params or "", query or "", fragment or "")
    )
    return cleaned
