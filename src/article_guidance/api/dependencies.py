"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from article_guidance.config import settings
from article_guidance.handlers import GuidanceHandler
from article_guidance.repositories import (
    InMemoryCacheRepository,
    RedisCacheRepository,
    RestOutlineSource,
    SparqlGraphClient,
    WikidataApiClient,
)
from article_guidance.services import (
    EntityMetadataFetcher,
    OutlineRegistry,
    SearchOrchestrator,
    StampedeSafeCache,
    TypeMatcher,
)


def get_handler(request: Request) -> GuidanceHandler:
    """Dependency injection for GuidanceHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The GuidanceHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "guidance_handler", None)
    if handler is None:
        raise RuntimeError("GuidanceHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (cache store, Wikidata, SPARQL, outline listing)
    2. Services (cache, fetcher, registry, matcher, orchestrator)
    3. Handler (HTTP endpoints) - stored in app.state.guidance_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes HTTP clients and removes everything from app.state on shutdown
    """
    # Cache backend: Redis for multi-process deployments, memory otherwise
    # ⚠️ IMPORTANT: When the stored shape changes, bump CACHE_SCHEMA_VERSION
    cache_store = RedisCacheRepository.create() if settings.uses_redis else InMemoryCacheRepository()

    entity_repository = WikidataApiClient.create()
    graph_client = SparqlGraphClient.create()
    outline_source = RestOutlineSource.create()

    cache = StampedeSafeCache(cache_store)
    fetcher = EntityMetadataFetcher(
        entity_repository=entity_repository,
        graph_client=graph_client,
        cache=cache,
    )
    outline_registry = OutlineRegistry(outline_source)
    orchestrator = SearchOrchestrator(
        entity_repository=entity_repository,
        outline_registry=outline_registry,
        type_matcher=TypeMatcher(graph_client),
    )
    guidance_handler = GuidanceHandler(
        orchestrator=orchestrator,
        fetcher=fetcher,
        outline_registry=outline_registry,
        cache_store=cache_store,
    )

    # Store in app.state (FastAPI pattern)
    app.state.guidance_handler = guidance_handler
    app.state.outline_registry = outline_registry
    app.state.cache = cache

    print("✓ Article guidance service initialized")
    print(f"✓ Cache backend: {settings.cache_backend} (schema {settings.cache_schema_version})")
    print(f"✓ Cache health: {cache_store.health_check()}")

    yield

    # Cleanup - close clients, remove from app.state
    await entity_repository.close()
    await graph_client.close()
    await outline_source.close()
    del app.state.guidance_handler
    del app.state.outline_registry
    del app.state.cache
    print("✓ Article guidance service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[GuidanceHandler, Depends(get_handler)]
