"""Repository layer for data access.

This layer abstracts external dependencies (Redis, Wikidata, the SPARQL
endpoint, the outline listing) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis → in-memory, Wikidata → a mirror, etc.)
- Unit testing with mock implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from article_guidance.protocols import CacheStore, EntityRepository, GraphQueryClient, OutlineSource

from .memory_repository import InMemoryCacheRepository
from .outline_client import RestOutlineSource
from .redis_repository import RedisCacheRepository
from .sparql_client import SparqlGraphClient
from .wikidata_client import WikidataApiClient

__all__ = [
    "CacheStore",
    "EntityRepository",
    "GraphQueryClient",
    "OutlineSource",
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    "RestOutlineSource",
    "SparqlGraphClient",
    "WikidataApiClient",
]
