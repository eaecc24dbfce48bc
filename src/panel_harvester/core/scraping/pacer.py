"""Request pacer: one minimum interval between physical requests.

A `Pacer` owns the "time of last request" for one upstream. Callers call
`wait()` right before issuing a request; the pacer reserves the next free
slot under its lock and then sleeps (outside the lock) until that slot.
Concurrent callers therefore leave with issue times at least
`min_interval` apart.

`shared_pacer` keeps one pacer per key (normally the source host) for the
whole process, so every fetcher talking to the same site shares one clock.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class Pacer:
    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        # None means "never requested": the first call does not wait.
        self._last_request: Optional[float] = None

    @property
    def last_request(self) -> Optional[float]:
        return self._last_request

    def tighten(self, min_interval: float) -> None:
        """Raise the interval to `min_interval`; never lowers it."""
        with self._lock:
            if min_interval > self.min_interval:
                self.min_interval = min_interval

    def reserve(self) -> float:
        """Claim the next issue slot and return how long to wait for it."""
        with self._lock:
            now = self._clock()
            if self._last_request is None:
                slot = now
            else:
                slot = max(now, self._last_request + self.min_interval)
            self._last_request = slot
            return slot - now

    def wait(self) -> float:
        """Block until the caller may issue its request. Returns the delay."""
        delay = self.reserve()
        if delay > 0:
            logger.debug("Pacing: sleeping %.3fs before next request", delay)
            self._sleep(delay)
        return delay


_PACERS: Dict[str, Pacer] = {}
_PACERS_LOCK = threading.Lock()


def shared_pacer(key: str, min_interval: float) -> Pacer:
    """Return the process-wide pacer for `key`, creating it on first use.

    A later call with a different interval keeps the existing pacer but
    raises its interval if the new one is stricter.
    """
    with _PACERS_LOCK:
        pacer = _PACERS.get(key)
        if pacer is None:
            pacer = Pacer(min_interval)
            _PACERS[key] = pacer
        else:
            pacer.tighten(min_interval)
        return pacer


def reset_shared_pacers() -> None:
    with _PACERS_LOCK:
        _PACERS.clear()
