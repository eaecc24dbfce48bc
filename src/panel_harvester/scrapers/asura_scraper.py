"""Plugin for asuracomic.net.

Chapter pages are not marked up in any stable way: the reader payload
carries page images next to covers, icons and ads from the same storage.
All of them live under `/storage/media/<id>/`, so the generic
cluster-by-media-id reconstruction does the work; this plugin only sets
the source constants.
"""

from __future__ import annotations

from .base_scraper import BaseScraper


class AsuraScraper(BaseScraper):
    BASE_URL = "https://asuracomic.net"
    MIN_INTERVAL = 0.5
    # relies on transport defaults
    TIMEOUT = None
    HOST_HINTS = ("gg.asuracomic.net", "storage")
    CHAPTER_PATH = "series/{chapter_id}"
