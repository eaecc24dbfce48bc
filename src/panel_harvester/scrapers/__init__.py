"""Registry and helper to select a source plugin by domain.

Simplest form: map known domains to a Scraper class. Falls back to
`BaseScraper`, which runs the generic media-id reconstruction.
"""

from typing import Type
from urllib.parse import urlparse

from .asura_scraper import AsuraScraper
from .base_scraper import BaseScraper
from .toonily_scraper import ToonilyScraper

_REGISTRY: dict[str, Type[BaseScraper]] = {
    "asuracomic.net": AsuraScraper,
    "toonily.me": ToonilyScraper,
}


def get_scraper_for_url(url: str) -> Type[BaseScraper]:
    domain = urlparse(url).netloc.lower()
    if domain in _REGISTRY:
        return _REGISTRY[domain]
    # subdomains (www., gg., ...) map to their parent site
    for key in _REGISTRY:
        if domain.endswith("." + key):
            return _REGISTRY[key]
    return BaseScraper


__all__ = ["get_scraper_for_url", "BaseScraper", "AsuraScraper", "ToonilyScraper"]
