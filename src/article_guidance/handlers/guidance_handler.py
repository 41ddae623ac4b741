"""HTTP handlers for article guidance operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import time

from fastapi import HTTPException, status

from article_guidance.dto import (
    EntityMetadataResponse,
    HealthCheckResponse,
    OutlineInvalidateResponse,
    SearchParams,
    SearchResponse,
    SearchResultItem,
)
from article_guidance.exceptions import EntitySearchError
from article_guidance.protocols import CacheStore
from article_guidance.services import EntityMetadataFetcher, OutlineRegistry, SearchOrchestrator


class GuidanceHandler:
    """HTTP handlers for search and entity resolution.

    This handler delegates business logic to the services
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Error handling and responses

    Example:
        ```python
        handler = GuidanceHandler(
            orchestrator=orchestrator,
            fetcher=fetcher,
            outline_registry=registry,
            cache_store=store,
        )

        # Use in FastAPI route
        @app.get("/search", response_model=SearchResponse)
        async def search(params: Annotated[SearchParams, Query()]):
            return await handler.search(params)
        ```
    """

    def __init__(
        self,
        orchestrator: SearchOrchestrator,
        fetcher: EntityMetadataFetcher,
        outline_registry: OutlineRegistry,
        cache_store: CacheStore,
    ) -> None:
        """Initialize the guidance handler.

        Args:
            orchestrator: Search pipeline (required).
            fetcher: Cached single-entity resolution (required).
            outline_registry: Process-wide outline holder (required).
            cache_store: Cache backend, for health reporting (required).
        """
        self._orchestrator = orchestrator
        self._fetcher = fetcher
        self._outlines = outline_registry
        self._store = cache_store

    async def search(self, params: SearchParams) -> SearchResponse:
        """Handle GET /search requests.

        Args:
            params: Query and language

        Returns:
            SearchResponse with the most specific matches per entity

        Raises:
            HTTPException: 502 if the upstream entity search fails
        """
        start_time = time.time()

        try:
            results = await self._orchestrator.search(params.q, params.language)
        except EntitySearchError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(e),
            ) from e

        lookup_time_ms = (time.time() - start_time) * 1000

        return SearchResponse(
            query=params.q,
            language=params.language,
            results=[
                SearchResultItem(
                    entity_id=result.entity_id,
                    label=result.label,
                    description=result.description,
                    source_url=result.source_url,
                    matched_type_id=result.matched_type_id,
                    hierarchy_depth=result.hierarchy_depth,
                    thumbnail=result.thumbnail,
                )
                for result in results
            ],
            lookup_time_ms=lookup_time_ms,
        )

    async def get_entity(self, entity_id: str, language: str) -> EntityMetadataResponse:
        """Handle GET /entities/{entity_id} requests.

        Args:
            entity_id: Wikidata item id
            language: Language code

        Returns:
            EntityMetadataResponse for the entity

        Raises:
            HTTPException: 404 if the entity has no usable content
        """
        metadata = await self._fetcher.fetch_cached(entity_id, language)
        if metadata is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No Wikidata information for {entity_id} in {language!r}",
            )

        return EntityMetadataResponse(
            id=metadata.id,
            label=metadata.label,
            description=metadata.description,
            image=metadata.image,
            hierarchy_depth=metadata.hierarchy_depth,
        )

    async def invalidate_outlines(self) -> OutlineInvalidateResponse:
        """Handle POST /outlines/invalidate requests."""
        self._outlines.invalidate()
        return OutlineInvalidateResponse(
            success=True,
            message="Outlines will be reloaded on next search",
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Returns:
            HealthCheckResponse with backend status
        """
        cache_healthy = self._store.health_check()

        return HealthCheckResponse(
            status="healthy" if cache_healthy else "unhealthy",
            cache_healthy=cache_healthy,
            outlines_loaded=self._outlines.is_loaded,
        )
