"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → in-memory, Wikidata → a mirror, etc.)
- Unit testing with mock implementations
- Clear separation of concerns

Usage:
    ```python
    from article_guidance.protocols import CacheStore, GraphQueryClient

    # Type hints work with any implementation
    store: CacheStore = RedisCacheRepository()        # works
    store: CacheStore = InMemoryCacheRepository()     # also works
    ```
"""

from .cache_store import CacheStore
from .entity_repository import EntityRepository
from .graph_query import GraphQueryClient
from .outline_source import OutlineSource

__all__ = [
    "CacheStore",
    "EntityRepository",
    "GraphQueryClient",
    "OutlineSource",
]
