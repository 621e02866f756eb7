"""
In-memory cache for upstream responses.

Holds the decoded body of successful upstream requests keyed by request
URL, so repeated lookups inside the freshness window reuse one OpenSky
snapshot instead of re-fetching it:
- Per-entry expiry against an injectable clock
- Thread-safe operations for concurrent request handlers
- Oldest-first eviction when over capacity

Only successful bodies are stored; callers never cache failures.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from flightmint.config import config

logger = logging.getLogger(__name__)


@dataclass
class CachedResponse:
    """A cached upstream body and the clock reading when it was stored."""
    url: str
    body: Any
    cached_at: float


class ResponseCache:
    """
    Thread-safe TTL cache for upstream response bodies.

    The clock is any zero-argument callable returning seconds; tests pass
    a fake to step time forward deterministically.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = config.cache.ttl_seconds if ttl_seconds is None else ttl_seconds
        self.max_entries = max_entries or config.cache.max_entries
        self._clock = clock

        self._cache: Dict[str, CachedResponse] = {}
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0

    def get(self, url: str) -> Optional[Any]:
        """
        Get the cached body for a URL.

        Returns None if not cached or expired.
        """
        with self._lock:
            entry = self._cache.get(url)
            if entry is not None:
                age = self._clock() - entry.cached_at
                if age < self.ttl_seconds:
                    self._hits += 1
                    logger.debug(f'Cache hit for {url} (age {age:.1f}s)')
                    return entry.body
                # Expired
                del self._cache[url]

            self._misses += 1
        return None

    def set(self, url: str, body: Any) -> None:
        """Store a successful body for a URL."""
        if self.ttl_seconds <= 0:
            return

        with self._lock:
            self._cache[url] = CachedResponse(url=url, body=body, cached_at=self._clock())

            # Evict if over capacity
            if len(self._cache) > self.max_entries:
                self._evict_oldest()

    def _evict_oldest(self) -> None:
        """Remove the oldest entries until back within capacity."""
        entries = sorted(self._cache.items(), key=lambda x: x[1].cached_at)
        for url, _ in entries[:len(entries) - self.max_entries]:
            del self._cache[url]

    def invalidate(self, url: str) -> None:
        """Remove specific entry from cache."""
        with self._lock:
            self._cache.pop(url, None)

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._cache.clear()

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            lookups = self._hits + self._misses
            return {
                'entries': len(self._cache),
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': self._hits / lookups if lookups > 0 else 0,
                'ttl_seconds': self.ttl_seconds,
            }
