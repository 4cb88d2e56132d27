"""Time-expiring cache in front of a ContentFetcher."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from starter_importer.domain.entities import RepoFile
from starter_importer.domain.exceptions import StarterImporterError
from starter_importer.domain.ports.content_fetcher import ContentFetcher

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600.0


@dataclass(frozen=True, slots=True)
class CacheEntry:
    data: tuple[RepoFile, ...]
    timestamp: float


class RepoContentCache:
    """Serve repository contents from memory for ``ttl`` seconds.

    Past the TTL the next lookup re-fetches.  When that re-fetch fails and an
    expired entry exists, the expired data is returned instead of the error.
    A cold key re-raises whatever the fetcher raised.

    There is no per-key locking: two concurrent misses for the same key both
    fetch and the last one to finish owns the entry.  That is acceptable only
    because entries are derived idempotently from the same remote tree.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @staticmethod
    def key(repo_id: str, path: str = "") -> str:
        return f"{repo_id}:{path}"

    async def get(self, repo_id: str, path: str = "") -> list[RepoFile]:
        cache_key = self.key(repo_id, path)
        cached = self._entries.get(cache_key)
        now = self._clock()

        if cached is not None and now - cached.timestamp < self._ttl:
            logger.debug("Using cached content for %s", cache_key)
            return list(cached.data)

        try:
            data = await self._fetcher.fetch(repo_id, path)
        except StarterImporterError as exc:
            if cached is None:
                raise
            logger.warning(
                "Fetch failed for %s (%s); serving expired cache entry", cache_key, exc
            )
            return list(cached.data)

        self._entries[cache_key] = CacheEntry(data=tuple(data), timestamp=now)
        return list(data)

    async def fetch(self, repo_id: str, path: str = "") -> list[RepoFile]:
        """ContentFetcher port — lets the cache stand in for the fetcher."""
        return await self.get(repo_id, path)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
