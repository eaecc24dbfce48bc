"""Core scraping primitives exported for reuse across plugins and flows.

This package contains small, well-tested building blocks: Pacer, Fetcher,
the fetch error types, Parser, Normalizer, candidate building and the
sequence reconstruction, plus Prefect task wrappers.
"""

from .candidates import build_candidates, parse_candidate
from .errors import (
    ClientError,
    FetchError,
    RateLimited,
    RetriesExhausted,
    ServerUnavailable,
    TransportError,
    TransportErrorKind,
)
from .fetcher import Fetcher
from .normalizer import normalize_url
from .pacer import Pacer, shared_pacer
from .parser import extract_asset_urls, extract_img_sources
from .prefect_tasks import (
    extract_candidates_task,
    fetch_html_task,
    reconstruct_pages_task,
)
from .sequencer import GAP_TOLERANCE, reconstruct

__all__ = [
    "Pacer",
    "shared_pacer",
    "Fetcher",
    "FetchError",
    "RateLimited",
    "ServerUnavailable",
    "TransportError",
    "TransportErrorKind",
    "ClientError",
    "RetriesExhausted",
    "extract_asset_urls",
    "extract_img_sources",
    "normalize_url",
    "build_candidates",
    "parse_candidate",
    "GAP_TOLERANCE",
    "reconstruct",
    "fetch_html_task",
    "extract_candidates_task",
    "reconstruct_pages_task",
]
