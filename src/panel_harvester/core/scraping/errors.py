"""Typed failures raised by the fetcher.

Each failed physical attempt is classified into one of these exceptions.
The retryable ones are retried by `Fetcher.fetch` and, once the attempts run
out, wrapped in `RetriesExhausted`. The others surface unwrapped.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class TransportErrorKind(str, Enum):
    CONNECTION_RESET = "connection_reset"
    TIMEOUT = "timeout"
    OTHER = "other"


class FetchError(Exception):
    """Base class for every fetch failure; carries the requested URL."""

    retryable = False

    def __init__(self, url: str, message: str = ""):
        self.url = url
        super().__init__(message or url)


class RetryableFetchError(FetchError):
    retryable = True


class RateLimited(RetryableFetchError):
    """HTTP 429."""

    status_code = 429

    def __init__(self, url: str):
        super().__init__(url, f"HTTP 429: Too Many Requests ({url})")


class ServerUnavailable(RetryableFetchError):
    """HTTP 503 / 504."""

    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, f"HTTP {status_code}: server unavailable ({url})")


class TransportError(FetchError):
    """The request never produced an HTTP response."""

    def __init__(self, url: str, kind: TransportErrorKind, detail: str = ""):
        self.kind = kind
        message = f"transport error ({kind.value}) on {url}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(url, message)

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.kind in (
            TransportErrorKind.CONNECTION_RESET,
            TransportErrorKind.TIMEOUT,
        )


class ClientError(FetchError):
    """Any non-2xx status outside the retryable set. Never retried."""

    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.status_code = status_code
        text = f"HTTP {status_code}"
        if reason:
            text = f"{text}: {reason}"
        super().__init__(url, f"{text} ({url})")


class RetriesExhausted(FetchError):
    """Raised when a retryable failure persists after the last attempt."""

    def __init__(self, url: str, last_cause: FetchError, attempts: int):
        self.last_cause = last_cause
        self.attempts = attempts
        super().__init__(
            url, f"retries exhausted after {attempts} attempts: {last_cause}"
        )


def classify_status(
    url: str, status_code: int, reason: str = ""
) -> Optional[FetchError]:
    """Map an HTTP status to the matching failure, or None for 2xx."""
    if status_code == 429:
        return RateLimited(url)
    if status_code in (503, 504):
        return ServerUnavailable(url, status_code)
    if 200 <= status_code < 300:
        return None
    return ClientError(url, status_code, reason)
