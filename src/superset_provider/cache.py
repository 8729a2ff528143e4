import asyncio
import logging
import time
from typing import Awaitable, Callable, List, Optional

from .models import DatabaseSummary

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300.0


class DatabaseListingCache:
    """Time-boxed snapshot of the database listing endpoint.

    One instance is built per provider and handed to every client it
    creates, so all resolvers running in one reconciliation pass share a
    single fetch. Concurrent misses are coalesced: the fetch path holds a
    lock and re-checks validity after acquiring it.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._databases: List[DatabaseSummary] = []
        self._cached_at: Optional[float] = None
        # Bumped by invalidate/reset so a fetch in flight does not stamp a stale snapshot
        self._generation = 0
        self._lock = asyncio.Lock()

    def _is_valid(self) -> bool:
        if not self._databases or self._cached_at is None:
            return False
        return self._clock() - self._cached_at < self.ttl

    async def get_databases(
        self, fetch: Callable[[], Awaitable[List[DatabaseSummary]]]
    ) -> List[DatabaseSummary]:
        """Return the cached listing, calling `fetch` at most once on a miss."""
        if self._is_valid():
            logger.debug(f"Using cached database listing ({len(self._databases)} databases)")
            return self._databases

        async with self._lock:
            # Another task may have refreshed while we waited
            if self._is_valid():
                logger.debug("Using cached database listing after waiting for refresh")
                return self._databases

            generation = self._generation
            databases = list(await fetch())
            if generation != self._generation:
                logger.debug("Database listing invalidated during fetch, not caching it")
                return databases

            self._databases = databases
            self._cached_at = self._clock()
            logger.info(f"Cached database listing with {len(self._databases)} databases")
            return self._databases

    def invalidate(self):
        """Expire the snapshot so the next lookup refetches."""
        self._generation += 1
        self._cached_at = None

    def reset(self):
        """Drop the snapshot unconditionally."""
        self._generation += 1
        self._databases = []
        self._cached_at = None
        logger.debug("Database listing cache cleared")
