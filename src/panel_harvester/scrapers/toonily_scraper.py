"""Plugin for toonily.me.

Toonily wraps every page image in a `.chapter-image` container, so DOM
order is trustworthy here and no reconstruction is needed.
"""

from __future__ import annotations

from typing import Dict, List
from urllib.parse import urlparse

from panel_harvester.core.scraping.parser import extract_img_sources

from .base_scraper import BaseScraper


class ToonilyScraper(BaseScraper):
    BASE_URL = "https://toonily.me"
    MIN_INTERVAL = 0.6
    TIMEOUT = 15.0
    RECONSTRUCT = False

    PAGE_SELECTOR = ".chapter-image img"
    PLACEHOLDER = "loading.svg"

    def chapter_headers(self, series_url: str | None = None) -> Dict[str, str]:
        # chapter URLs are /<series-slug>/<chapter-slug>; the reader expects
        # the series page as Referer
        if not series_url:
            segments = [s for s in urlparse(self.url).path.split("/") if s]
            if len(segments) > 1:
                series_url = f"{self.config.base_url}/{segments[0]}"
        return super().chapter_headers(series_url)

    def chapter_pages(self, html: str) -> List[str]:
        return [
            src
            for src in extract_img_sources(html, self.PAGE_SELECTOR)
            if self.PLACEHOLDER not in src
        ]
