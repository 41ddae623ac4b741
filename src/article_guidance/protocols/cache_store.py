"""Cache storage protocol.

Defines the interface for any key/value backend that can hold versioned
cache entries with a time-to-live.

Implementations can include:
- In-process dictionary (default)
- Redis
- Any other key/value store with expiry
"""

from typing import Protocol, runtime_checkable

from article_guidance.entities import CacheEntry


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.

    Example:
        ```python
        from article_guidance.protocols import CacheStore

        store: CacheStore = InMemoryCacheRepository()
        store: CacheStore = RedisCacheRepository.create()
        ```
    """

    def get(self, key: str) -> CacheEntry | None:
        """Read an entry.

        Args:
            key: Namespaced cache key

        Returns:
            The stored entry, or None if absent or evicted
        """
        ...

    def set(self, key: str, entry: CacheEntry, ttl: int) -> None:
        """Write an entry.

        Args:
            key: Namespaced cache key
            entry: Entry to store
            ttl: Backend eviction time in seconds
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete a single entry.

        Args:
            key: The cache key to delete

        Returns:
            True if deleted, False otherwise
        """
        ...

    def clear_all(self) -> int:
        """Clear every entry in the store's namespace.

        Returns:
            Number of entries deleted
        """
        ...

    def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
