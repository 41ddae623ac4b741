"""Read-through cache with single-flight misses and negative caching.

Concurrent misses for the same key collapse into one computation: the
first caller starts a task and every later caller awaits that same task
instead of re-issuing the upstream requests. Keys carry a schema-version
segment, so changing the stored shape is done by bumping the version.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, TypeVar

from article_guidance.config import settings
from article_guidance.entities import CacheEntry
from article_guidance.protocols import CacheStore

logger = logging.getLogger(__name__)

V = TypeVar("V")


def _checked_ttls(ttl: int, negative_ttl: int) -> tuple[int, int]:
    if not 0 < negative_ttl < ttl:
        raise ValueError(f"TTLs must satisfy 0 < negative_ttl < ttl, got ttl={ttl} negative_ttl={negative_ttl}")
    return ttl, negative_ttl


class StampedeSafeCache:
    """Versioned TTL cache guaranteeing at most one compute per key.

    A non-None compute result is kept for the positive TTL; None (or a
    raised exception) is kept as a tombstone for the much shorter negative
    TTL, so a transient upstream outage is retried within minutes.

    Example:
        ```python
        cache = StampedeSafeCache(InMemoryCacheRepository())
        key = cache.make_key("wikidata", "Q5", "en")

        value = await cache.get_or_compute(key, lambda: fetch("Q5", "en"))
        ```
    """

    def __init__(
        self,
        store: CacheStore,
        namespace: str | None = None,
        schema_version: str | None = None,
        ttl: int | None = None,
        negative_ttl: int | None = None,
        lock_timeout: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            store: Backend holding the entries.
            namespace: Leading key segment. Defaults to settings.cache_namespace.
            schema_version: Trailing key segment. Defaults to settings.cache_schema_version.
            ttl: Positive-result TTL in seconds. Defaults to settings.entity_cache_ttl.
            negative_ttl: Tombstone TTL in seconds. Defaults to settings.negative_cache_ttl.
            lock_timeout: Longest a caller waits on another caller's compute
                before running its own. Defaults to settings.cache_lock_timeout.
            clock: Time source, injectable for tests.

        Raises:
            ValueError: If the TTLs are not 0 < negative_ttl < ttl
        """
        self._store = store
        self._namespace = namespace or settings.cache_namespace
        self._version = schema_version or settings.cache_schema_version
        self._ttl, self._negative_ttl = _checked_ttls(
            settings.entity_cache_ttl if ttl is None else ttl,
            settings.negative_cache_ttl if negative_ttl is None else negative_ttl,
        )
        self._lock_timeout = settings.cache_lock_timeout if lock_timeout is None else lock_timeout
        self._clock = clock
        self._inflight: dict[str, asyncio.Task] = {}
        self._hits = 0
        self._misses = 0
        self._computes = 0

    def make_key(self, subject: str, *parts: str) -> str:
        """Build `{namespace}:{subject}:{parts...}:{schema_version}`.

        Example:
            ```python
            cache.make_key("wikidata", "Q5", "en")  # "articleguidance:wikidata:Q5:en:v3"
            ```
        """
        return ":".join([self._namespace, subject, *parts, self._version])

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[V | None]],
        ttl: int | None = None,
        negative_ttl: int | None = None,
        encode: Callable[[V], Any] | None = None,
        decode: Callable[[Any], V] | None = None,
    ) -> V | None:
        """Return the cached value for key, computing it at most once on a miss.

        Args:
            key: Versioned cache key (see make_key)
            compute: Coroutine factory producing the value, or None for "no data"
            ttl: Override the positive TTL
            negative_ttl: Override the tombstone TTL
            encode: Converts a value to its stored form (e.g. a dict for Redis)
            decode: Converts a stored form back to a value

        Returns:
            The cached or freshly computed value; None for a negative result

        Raises:
            ValueError: If the TTL overrides are not 0 < negative_ttl < ttl
            Exception: Whatever compute raised, delivered to every caller of that flight
        """
        ttl, negative_ttl = _checked_ttls(
            self._ttl if ttl is None else ttl,
            self._negative_ttl if negative_ttl is None else negative_ttl,
        )

        hit, value = self._lookup(key, decode)
        if hit:
            self._hits += 1
            logger.debug("Cache hit: %s", key)
            return value

        self._misses += 1
        flight = self._inflight.get(key)
        if flight is None:
            logger.debug("Cache miss, computing: %s", key)
            flight = asyncio.ensure_future(self._fill(key, compute, ttl, negative_ttl, encode))
            self._inflight[key] = flight
            flight.add_done_callback(partial(self._forget, key))
            return await asyncio.shield(flight)

        try:
            return await asyncio.wait_for(asyncio.shield(flight), timeout=self._lock_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Waited %.1fs on in-flight compute for %s, computing independently",
                self._lock_timeout,
                key,
            )
            return await self._fill(key, compute, ttl, negative_ttl, encode)

    def delete(self, key: str) -> bool:
        """Drop a single entry."""
        return self._store.delete(key)

    def is_computing(self, key: str) -> bool:
        """Whether a compute for key is currently in flight."""
        return key in self._inflight

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with hit/miss counters and configuration
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "computes": self._computes,
            "in_flight": len(self._inflight),
            "ttl": self._ttl,
            "negative_ttl": self._negative_ttl,
            "schema_version": self._version,
        }

    @property
    def schema_version(self) -> str:
        """Version segment appended to every key."""
        return self._version

    def _lookup(self, key: str, decode: Callable[[Any], V] | None) -> tuple[bool, V | None]:
        entry = self._store.get(key)
        if entry is None or entry.version != self._version or entry.is_expired(self._clock()):
            return False, None
        if entry.is_tombstone:
            return True, None
        return True, decode(entry.value) if decode else entry.value

    async def _fill(
        self,
        key: str,
        compute: Callable[[], Awaitable[V | None]],
        ttl: int,
        negative_ttl: int,
        encode: Callable[[V], Any] | None,
    ) -> V | None:
        self._computes += 1
        try:
            value = await compute()
        except Exception:
            logger.warning("Cache compute failed for %s, caching negative result", key, exc_info=True)
            self._write(key, None, negative_ttl)
            raise

        if value is None:
            self._write(key, None, negative_ttl)
        else:
            self._write(key, encode(value) if encode else value, ttl)
        return value

    def _write(self, key: str, stored: Any, ttl: int) -> None:
        entry = CacheEntry(value=stored, expires_at=self._clock() + ttl, version=self._version)
        self._store.set(key, entry, ttl)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
