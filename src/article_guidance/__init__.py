"""Article Guidance - Wikidata type resolution for article outlines.

This package provides a layered architecture for matching entities to
curated article outlines by their position in the Wikidata type hierarchy:

Layers:
    - protocols: Interface contracts (CacheStore, GraphQueryClient, ...)
    - repositories: Data access implementations (Redis, Wikidata, SPARQL)
    - services: Business logic (matching, specificity, caching, search)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from article_guidance.repositories import SparqlGraphClient
    from article_guidance.services import TypeMatcher

    matcher = TypeMatcher(SparqlGraphClient.create())
    matches = await matcher.find_matches(["Q146"], ["Q729"])
    ```

For HTTP API:
    ```python
    from article_guidance.api.app import app
    ```
"""

from article_guidance.config import get_redis_client, settings
from article_guidance.entities import EntityMetadata, OutlineType, SearchResult
from article_guidance.exceptions import ArticleGuidanceError, EntitySearchError, OutlineLoadError
from article_guidance.protocols import CacheStore, EntityRepository, GraphQueryClient, OutlineSource
from article_guidance.repositories import (
    InMemoryCacheRepository,
    RedisCacheRepository,
    RestOutlineSource,
    SparqlGraphClient,
    WikidataApiClient,
)
from article_guidance.services import (
    EntityMetadataFetcher,
    InteractiveSearchSession,
    OutlineRegistry,
    SearchOrchestrator,
    StampedeSafeCache,
    TypeMatcher,
    filter_most_specific,
)

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Errors
    "ArticleGuidanceError",
    "EntitySearchError",
    "OutlineLoadError",
    # Protocols (interfaces)
    "CacheStore",
    "EntityRepository",
    "GraphQueryClient",
    "OutlineSource",
    # Services (business logic)
    "EntityMetadataFetcher",
    "InteractiveSearchSession",
    "OutlineRegistry",
    "SearchOrchestrator",
    "StampedeSafeCache",
    "TypeMatcher",
    "filter_most_specific",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    "RestOutlineSource",
    "SparqlGraphClient",
    "WikidataApiClient",
    # Entities (domain models)
    "EntityMetadata",
    "OutlineType",
    "SearchResult",
]
