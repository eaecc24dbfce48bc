"""Prefect tasks wrapping the scraping components.

Each task is one unit of work of the chapter flow (fetch the page, pull
the candidates out of it, rebuild the page order) with Prefect logs.
Prefect retries stay at 0: the fetcher owns pacing and retrying, and its
attempt bound must hold per logical fetch.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from prefect import get_run_logger, task

from panel_harvester.core.config import SourceConfig
from panel_harvester.core.interfaces import Candidate
from panel_harvester.core.scraping.candidates import (
    DEFAULT_DENYLIST,
    DEFAULT_ID_PATTERN,
    build_candidates,
)
from panel_harvester.core.scraping.fetcher import Fetcher
from panel_harvester.core.scraping.parser import extract_asset_urls
from panel_harvester.core.scraping.sequencer import GAP_TOLERANCE, reconstruct


@task(name="fetch_html", retries=0)
def fetch_html_task(
    url: str, source: Dict, headers: Optional[Dict[str, str]] = None
) -> str:
    logger = get_run_logger()
    config = SourceConfig(**source)
    logger.info("Fetching URL: %s", url)
    html = Fetcher.from_config(config).fetch(url, headers=headers)
    logger.info("Fetched %s (%d chars)", url, len(html))
    return html


@task(name="extract_candidates", retries=0)
def extract_candidates_task(
    html: str,
    host_hints: Iterable[str] = (),
    denylist: Iterable[str] = DEFAULT_DENYLIST,
    id_pattern: str = DEFAULT_ID_PATTERN,
) -> List[Candidate]:
    logger = get_run_logger()
    urls = extract_asset_urls(html)
    candidates = build_candidates(
        urls, host_hints=host_hints, denylist=denylist, id_pattern=id_pattern
    )
    logger.info("Kept %d of %d asset URLs as candidates", len(candidates), len(urls))
    return candidates


@task(name="reconstruct_pages", retries=0)
def reconstruct_pages_task(
    candidates: List[Candidate], gap_tolerance: int = GAP_TOLERANCE
) -> List[str]:
    logger = get_run_logger()
    pages = reconstruct(candidates, gap_tolerance)
    if not pages:
        logger.warning("No page sequence found among %d candidates", len(candidates))
    return pages
