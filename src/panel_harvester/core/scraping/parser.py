"""HTML scanning helpers: pull candidate image URLs out of a page body.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from panel_harvester.core.scraping.normalizer import normalize_url

DEFAULT_IMAGE_EXTENSIONS = ("webp", "jpg", "jpeg", "png")


def _asset_regex(extensions: Iterable[str]) -> re.Pattern:
    exts = "|".join(re.escape(e) for e in extensions)
    # plain and JSON-escaped (https:\/\/host\/a.jpg) absolute URLs; an escaped
    # quote (\") ends the match
    return re.compile(
        r"https?:\\?/\\?/(?:[^\"'\s\\]|\\/)+\.(?:" + exts + r")", re.IGNORECASE
    )


def _uniq(urls: Iterable[str]) -> List[str]:
    seen = set()
    uniq: List[str] = []
    for u in urls:
        if u not in seen:
            seen.add(u)
            uniq.append(u)
    return uniq


def extract_asset_urls(
    html: str, extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS
) -> List[str]:
    """Scan raw page text for absolute image URLs.

    - Works on markup and on inline script payloads alike.
    - Returns normalized URLs, deduplicated, in order of first appearance.
    """
    results: List[str] = []
    for m in _asset_regex(extensions).finditer(html or ""):
        url = normalize_url(m.group(0))
        if url.startswith("http"):
            results.append(url)
    return _uniq(results)


def extract_img_sources(html: str, selector: Optional[str] = None) -> List[str]:
    """Return image sources of `<img>` elements (or of `selector` matches).

    Lazy-loaded images keep the real address in `data-src`, so it wins over
    `src`. Document order is kept.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    images = soup.select(selector) if selector else soup.find_all("img")
    results: List[str] = []
    for img in images:
        raw = img.get("data-src") or img.get("src")
        if not raw:
            continue
        src = normalize_url(str(raw))
        if src.startswith("http"):
            results.append(src)
    return _uniq(results)
