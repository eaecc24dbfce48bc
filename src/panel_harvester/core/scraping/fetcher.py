"""Polite HTTP fetcher: global pacing, classified failures, bounded retries.

Provides a small `Fetcher` object exposing `fetch` (text body or a typed
`FetchError`).
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Dict, Optional

import requests
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError

from panel_harvester.core.config import SourceConfig
from panel_harvester.core.scraping.errors import (
    FetchError,
    RetriesExhausted,
    RateLimited,
    TransportError,
    TransportErrorKind,
    classify_status,
)
from panel_harvester.core.scraping.pacer import Pacer, shared_pacer

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,"
    "image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}

RATE_LIMIT_BACKOFF = 2.0
RATE_LIMIT_JITTER = 1.0
RETRY_DELAY = 1.0


def _transport_kind(exc: BaseException) -> TransportErrorKind:
    # requests wraps urllib3 errors which wrap the socket error; walk the chain.
    # A body read that times out arrives as ConnectionError(ReadTimeoutError).
    seen = set()
    todo = [exc]
    while todo:
        err = todo.pop()
        if err is None or id(err) in seen:
            continue
        seen.add(id(err))
        if isinstance(err, (Urllib3TimeoutError, TimeoutError)):
            return TransportErrorKind.TIMEOUT
        if isinstance(err, ConnectionResetError):
            return TransportErrorKind.CONNECTION_RESET
        todo.extend(a for a in getattr(err, "args", ()) if isinstance(a, BaseException))
        todo.append(err.__cause__)
        todo.append(err.__context__)
        reason = getattr(err, "reason", None)
        if isinstance(reason, BaseException):
            todo.append(reason)
    return TransportErrorKind.OTHER


class Fetcher:
    """HTTP client that respects one source's rate limit.

    Usage:
        f = Fetcher(referer="https://example.org/", pacer=Pacer(0.6))
        html = f.fetch(url)
    """

    def __init__(
        self,
        pacer: Pacer,
        timeout: Optional[float] = 15,
        max_retries: int = 2,
        referer: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.pacer = pacer
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests.Session()
        self.base_headers = dict(DEFAULT_HEADERS)
        if referer:
            self.base_headers["Referer"] = referer
        if headers:
            self.base_headers.update(headers)
        self._sleep = sleep
        self._rng = rng or random.Random()

    @classmethod
    def from_config(
        cls, config: SourceConfig, pacer: Optional[Pacer] = None, **kwargs
    ) -> "Fetcher":
        """Build a fetcher bound to the process-wide pacer of the config's host."""
        return cls(
            pacer=pacer or shared_pacer(config.host, config.min_interval),
            timeout=config.timeout,
            max_retries=config.max_retries,
            referer=config.referer,
            headers=config.headers,
            **kwargs,
        )

    def _headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        base = dict(self.base_headers)
        if headers:
            base.update(headers)
        return base

    def _attempt(self, url: str, headers: Dict[str, str]) -> str:
        """One physical request; returns the body or raises a `FetchError`."""
        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            raise TransportError(url, TransportErrorKind.TIMEOUT, str(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(url, _transport_kind(exc), str(exc)) from exc

        error = classify_status(url, resp.status_code, getattr(resp, "reason", ""))
        if error is not None:
            raise error
        return resp.text

    def _backoff(self, error: FetchError) -> float:
        if isinstance(error, RateLimited):
            return RATE_LIMIT_BACKOFF + self._rng.uniform(0, RATE_LIMIT_JITTER)
        return RETRY_DELAY

    def fetch(
        self,
        url: str,
        max_retries: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """GET `url` and return its text.

        Retries 429, 503/504, timeouts and connection resets up to
        `max_retries` times (so `max_retries + 1` attempts in total). Other
        failures are raised right away.
        """
        attempts_remaining = self.max_retries if max_retries is None else max_retries
        merged = self._headers(headers)
        attempts = 0

        while True:
            self.pacer.wait()
            attempts += 1
            try:
                return self._attempt(url, merged)
            except FetchError as exc:
                if not exc.retryable:
                    raise
                if attempts_remaining <= 0:
                    logger.error(
                        "Giving up on %s after %d attempts: %s", url, attempts, exc
                    )
                    raise RetriesExhausted(url, exc, attempts) from exc
                delay = self._backoff(exc)
                logger.warning("%s; retrying in %.2fs", exc, delay)
                self._sleep(delay)
                attempts_remaining -= 1
