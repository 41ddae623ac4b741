"""Redis implementation of CacheStore.

Each cache entry is stored as a JSON document under its namespaced key
with a native Redis expiry. It satisfies the CacheStore protocol.
"""

import json
import logging

import redis

from article_guidance.config import get_redis_client, settings
from article_guidance.entities import CacheEntry

logger = logging.getLogger(__name__)


class RedisCacheRepository:
    """Redis-backed cache store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Uses plain string keys with:
    - JSON-encoded CacheEntry payloads
    - SET ... EX for backend eviction
    - SCAN over the namespace prefix for bulk clears
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            namespace: Key prefix owned by this store. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._namespace = namespace or settings.cache_namespace

    @classmethod
    def create(cls, namespace: str | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            namespace: Key prefix. If None, uses settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(namespace=namespace)

    def get(self, key: str) -> CacheEntry | None:
        """Read an entry from Redis.

        Args:
            key: Namespaced cache key

        Returns:
            The stored entry, or None if missing or undecodable
        """
        try:
            raw = self._client.get(key)
        except redis.RedisError as e:
            logger.warning("Redis read failed for %s, treating as miss: %s", key, e)
            return None
        if raw is None:
            return None

        try:
            return CacheEntry.from_dict(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding undecodable cache entry %s: %s", key, e)
            self._client.delete(key)
            return None

    def set(self, key: str, entry: CacheEntry, ttl: int) -> None:
        """Store an entry in Redis.

        Args:
            key: Namespaced cache key
            entry: Entry to store
            ttl: Time-to-live in seconds
        """
        try:
            self._client.set(key, json.dumps(entry.to_dict()), ex=ttl)
        except redis.RedisError as e:
            logger.warning("Redis write failed for %s, entry not cached: %s", key, e)

    def delete(self, key: str) -> bool:
        """Delete a specific entry by key.

        Args:
            key: The cache key to delete

        Returns:
            True if deleted, False otherwise
        """
        result: int = self._client.delete(key)  # type: ignore[assignment]
        return result > 0

    def clear_all(self) -> int:
        """Clear all entries under this repository's namespace.

        Returns:
            Number of entries deleted
        """
        count = 0
        for key in self._client.scan_iter(match=f"{self._namespace}:*"):
            if self._client.delete(key):
                count += 1
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            result = self._client.ping()
            return bool(result)
        except redis.RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
