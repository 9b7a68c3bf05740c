"""Per-client request limiting for vehicle creation.

Example:
    >>> limiter = FixedWindowRateLimiter(limit=3, window=60)
    >>> limiter.hit("10.0.0.1")
    True
"""
import logging
import threading
import time
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


class FixedWindowRateLimiter:
    """Counts requests per key over the trailing ``window`` seconds.

    Every request is recorded, rejected ones included. Timestamps older than
    ``window`` seconds are dropped, and the request is rejected once the
    remaining count exceeds ``limit``. Keys with no activity for ``idle_ttl``
    seconds are dropped. Safe to share between threads.
    """

    def __init__(
        self,
        limit: int = 3,
        window: float = 60.0,
        idle_ttl: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window = window
        self.idle_ttl = max(idle_ttl, window)
        self._clock = clock
        self._hits: Dict[str, List[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def hit(self, key: str) -> bool:
        """Record a request for ``key``; return False if it must be rejected."""
        with self._lock:
            now = self._clock()
            self._sweep(now)
            hits = [t for t in self._hits.get(key, []) if now - t <= self.window]
            hits.append(now)
            self._hits[key] = hits
            if len(hits) > self.limit:
                logger.warning("rate limit exceeded for %s (%d in %ss)", key, len(hits), self.window)
                return False
            return True

    def _sweep(self, now: float):
        # at most once per window
        if now - self._last_sweep < self.window:
            return
        self._last_sweep = now
        stale = [k for k, hits in self._hits.items() if not hits or now - hits[-1] > self.idle_ttl]
        for k in stale:
            del self._hits[k]
        if stale:
            logger.debug("evicted %d idle rate-limit keys, %d tracked", len(stale), len(self._hits))
