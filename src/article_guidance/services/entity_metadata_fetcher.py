"""Entity metadata service.

Resolves a single entity's label, description, image and hierarchy depth.
The content lookup and the depth query run concurrently; the depth is an
enhancement, so losing it never loses the rest of the row.
"""

import asyncio
import logging
from typing import Any

from article_guidance.config import settings
from article_guidance.entities import EntityId, EntityMetadata, is_valid_entity_id
from article_guidance.protocols import EntityRepository, GraphQueryClient
from article_guidance.services.stampede_cache import StampedeSafeCache
from article_guidance.utils import commons_thumbnail_url

logger = logging.getLogger(__name__)

CACHE_SUBJECT = "wikidata"


class EntityMetadataFetcher:
    """Fetches and caches EntityMetadata for known entity ids.

    Depends on PROTOCOLS, not concrete implementations:
    - EntityRepository: labels, descriptions, claims
    - GraphQueryClient: hierarchy depth

    Example:
        ```python
        fetcher = EntityMetadataFetcher(
            entity_repository=WikidataApiClient.create(),
            graph_client=SparqlGraphClient.create(),
            cache=StampedeSafeCache(InMemoryCacheRepository()),
        )

        metadata = await fetcher.fetch_cached("Q5", "en")
        ```
    """

    def __init__(
        self,
        entity_repository: EntityRepository,
        graph_client: GraphQueryClient,
        cache: StampedeSafeCache,
        thumbnail_width: int | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            entity_repository: Source of labels, descriptions and image claims (required).
            graph_client: Source of hierarchy depth (required).
            cache: Single-flight cache for fetch_cached (required).
            thumbnail_width: Commons thumbnail width. Defaults to settings.
        """
        self._entities = entity_repository
        self._graph = graph_client
        self._cache = cache
        self._thumbnail_width = thumbnail_width or settings.thumbnail_width

    async def fetch(self, entity_id: EntityId, language: str) -> EntityMetadata | None:
        """Fetch metadata for one entity, bypassing the cache.

        Business logic:
        1. Reject ids that are not item ids
        2. Request content and depth concurrently, wait for both
        3. Drop the row when content failed or has nothing to show
        4. Attach depth, or None when the depth lookup failed

        Args:
            entity_id: Item id (e.g. "Q5")
            language: Language code

        Returns:
            EntityMetadata, or None if the entity has no usable content
        """
        if not is_valid_entity_id(entity_id):
            return None
        entity_id = entity_id.strip()

        content, depth = await asyncio.gather(
            self._entities.fetch_entity_content(entity_id, language),
            self._graph.compute_hierarchy_depth(entity_id),
            return_exceptions=True,
        )

        if isinstance(content, BaseException):
            logger.error("Entity content lookup raised for %s: %s", entity_id, content)
            return None
        if isinstance(depth, BaseException):
            logger.warning("Depth lookup raised for %s (graceful degradation): %s", entity_id, depth)
            depth = None

        metadata = self._build_metadata(entity_id, content, depth)
        if metadata is None or not metadata.has_content:
            return None
        return metadata

    async def fetch_cached(self, entity_id: EntityId, language: str) -> EntityMetadata | None:
        """Fetch metadata through the stampede-safe cache.

        Positive rows live for a day; "no data" rows for a few minutes.

        Args:
            entity_id: Item id (e.g. "Q5")
            language: Language code

        Returns:
            EntityMetadata, or None if the entity has no usable content
        """
        if not is_valid_entity_id(entity_id):
            return None
        entity_id = entity_id.strip()

        key = self._cache.make_key(CACHE_SUBJECT, entity_id, language)
        return await self._cache.get_or_compute(
            key,
            lambda: self.fetch(entity_id, language),
            encode=EntityMetadata.to_dict,
            decode=EntityMetadata.from_dict,
        )

    def _build_metadata(
        self,
        entity_id: EntityId,
        content: dict[str, Any] | None,
        depth: int | None,
    ) -> EntityMetadata | None:
        if not content:
            return None

        image_name = content.get("image")
        image = commons_thumbnail_url(image_name, self._thumbnail_width) if image_name else None

        return EntityMetadata(
            id=entity_id,
            label=content.get("label") or None,
            description=content.get("description") or None,
            image=image,
            hierarchy_depth=depth,
        )
