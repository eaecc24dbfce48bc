"""
Chapter pages flow

Prefect flow that turns one chapter reader URL into the ordered list of its
page image URLs:

1. Validate the job configuration.
2. Pick the source plugin by domain; it supplies pacing, timeout, headers
   and candidate filters (job params may override them).
3. Fetch the reader page through the polite fetcher.
4. Either rebuild the page order from the media-id candidates or, for
   sources whose markup is reliable, read it from the DOM.

An empty result is a valid outcome ("no content found") and is returned
as such.
"""

from __future__ import annotations

from typing import List

from prefect import flow, get_run_logger

from panel_harvester.core.config import ChapterJobConfig
from panel_harvester.core.scraping.prefect_tasks import (
    extract_candidates_task,
    fetch_html_task,
    reconstruct_pages_task,
)
from panel_harvester.scrapers import get_scraper_for_url


@flow(name="Chapter Pages", log_prints=True)
def chapter_pages_flow(config_dict: dict) -> List[str]:
    """Return the ordered page URLs of the chapter at `source_url`.

    config_dict: must conform to `ChapterJobConfig`.
    """
    logger = get_run_logger()
    try:
        config = ChapterJobConfig(**config_dict)
        logger.info("Config valid for job: %s", config.job_name)
    except Exception as e:
        logger.error("Invalid config: %s", e)
        raise

    Plugin = get_scraper_for_url(config.source_url)
    plugin = Plugin(config.source_url, config.source_params)
    logger.info("Using plugin %s for %s", Plugin.__name__, plugin.config.host)

    html = fetch_html_task(
        config.source_url,
        plugin.config.model_dump(),
        plugin.chapter_headers(config.series_url),
    )

    if plugin.RECONSTRUCT:
        candidates = extract_candidates_task(html, **plugin.candidate_rules())
        pages = reconstruct_pages_task(candidates, plugin.config.gap_tolerance)
    else:
        pages = plugin.chapter_pages(html)

    logger.info("Job %s completed. %d pages found.", config.job_name, len(pages))
    return pages


if __name__ == "__main__":
    payload = {
        "job_name": "asura_chapter",
        "environment": "dev",
        "source_url": "https://asuracomic.net/series/some-series-1a2b3c4d/chapter/1",
    }
    for page in chapter_pages_flow(payload):
        print(page)
