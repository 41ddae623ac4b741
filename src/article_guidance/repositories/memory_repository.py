"""In-memory implementation of CacheStore.

Entries live in a process-local dictionary. This is the default backend
and the one used by the test-suite.
"""

import time
from collections.abc import Callable

from article_guidance.config import settings
from article_guidance.entities import CacheEntry


class InMemoryCacheRepository:
    """Dictionary-backed cache store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Entries are evicted lazily: an entry past its backend TTL is dropped
    the next time it is read, and every `sweep_interval` writes all expired
    entries are purged so keys that are never read again do not pile up.
    """

    def __init__(
        self,
        namespace: str | None = None,
        clock: Callable[[], float] = time.time,
        sweep_interval: int = 1000,
    ) -> None:
        """Initialize the in-memory repository.

        Args:
            namespace: Key prefix owned by this store. Defaults to settings.
            clock: Time source, injectable for tests.
            sweep_interval: Number of writes between purges of expired entries.
        """
        if sweep_interval < 1:
            raise ValueError("sweep_interval must be at least 1")
        self._namespace = namespace or settings.cache_namespace
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._writes = 0
        self._entries: dict[str, tuple[CacheEntry, float]] = {}

    def get(self, key: str) -> CacheEntry | None:
        item = self._entries.get(key)
        if item is None:
            return None
        entry, evict_at = item
        if self._clock() >= evict_at:
            del self._entries[key]
            return None
        return entry

    def set(self, key: str, entry: CacheEntry, ttl: int) -> None:
        self._entries[key] = (entry, self._clock() + ttl)
        self._writes += 1
        if self._writes % self._sweep_interval == 0:
            self.purge_expired()

    def purge_expired(self) -> int:
        """Drop every entry past its backend TTL.

        Returns:
            Number of entries dropped
        """
        now = self._clock()
        expired = [key for key, (_, evict_at) in self._entries.items() if now >= evict_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear_all(self) -> int:
        prefix = f"{self._namespace}:"
        keys = [key for key in self._entries if key.startswith(prefix)]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)
