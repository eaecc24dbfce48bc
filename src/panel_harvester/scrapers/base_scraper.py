"""Base source plugin used by flows.

Plugins should be small: class-level defaults for the source, plus an
override of `chapter_pages` (and `RECONSTRUCT = False`) when a site's
markup already gives the page order.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from panel_harvester.core.config import SourceConfig
from panel_harvester.core.interfaces import Candidate, ChapterSource
from panel_harvester.core.scraping.candidates import (
    DEFAULT_DENYLIST,
    DEFAULT_ID_PATTERN,
    build_candidates,
)
from panel_harvester.core.scraping.fetcher import Fetcher
from panel_harvester.core.scraping.parser import extract_asset_urls
from panel_harvester.core.scraping.sequencer import reconstruct


class BaseScraper(ChapterSource):
    """Generic plugin: scan the body for image URLs and rebuild the sequence.

    `url` is the source root (or any URL on it); `params` may override any
    `SourceConfig` field.
    """

    BASE_URL: Optional[str] = None
    MIN_INTERVAL = 0.6
    TIMEOUT: Optional[float] = 15.0
    HOST_HINTS: Tuple[str, ...] = ()
    DENYLIST: Tuple[str, ...] = DEFAULT_DENYLIST
    ID_PATTERN = DEFAULT_ID_PATTERN
    CHAPTER_PATH = "{chapter_id}"
    # False when chapter_pages reads the order straight from the markup
    RECONSTRUCT = True

    def __init__(self, url: str, params: dict | None = None):
        self.url = url
        self.params = params or {}
        self.config = self._build_config()

    def _build_config(self) -> SourceConfig:
        base_url = self.BASE_URL or self._root_of(self.url)
        defaults = {
            "base_url": base_url,
            "min_interval": self.MIN_INTERVAL,
            "timeout": self.TIMEOUT,
        }
        fields = set(SourceConfig.model_fields)
        overrides = {k: v for k, v in self.params.items() if k in fields}
        return SourceConfig(**{**defaults, **overrides})

    @staticmethod
    def _root_of(url: str) -> str:
        from urllib.parse import urlparse

        p = urlparse(url)
        return f"{p.scheme}://{p.netloc}"

    def fetcher(self, **kwargs) -> Fetcher:
        return Fetcher.from_config(self.config, **kwargs)

    def chapter_url(self, chapter_id: str) -> str:
        path = self.CHAPTER_PATH.format(chapter_id=chapter_id.lstrip("/"))
        return f"{self.config.base_url}/{path}"

    def chapter_headers(self, series_url: str | None = None) -> Dict[str, str]:
        """Per-request headers for a chapter fetch (Referer override)."""
        return {"Referer": series_url} if series_url else {}

    def candidate_rules(self) -> Dict[str, Any]:
        """Filters handed to `build_candidates`; params may override them."""
        return {
            "host_hints": tuple(self.params.get("host_hints", self.HOST_HINTS)),
            "denylist": tuple(self.params.get("denylist", self.DENYLIST)),
            "id_pattern": self.params.get("id_pattern", self.ID_PATTERN),
        }

    def extract_candidates(self, html: str) -> List[Candidate]:
        return build_candidates(extract_asset_urls(html), **self.candidate_rules())

    def chapter_pages(self, html: str) -> List[str]:
        return reconstruct(self.extract_candidates(html), self.config.gap_tolerance)
