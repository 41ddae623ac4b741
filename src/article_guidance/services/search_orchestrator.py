"""Search orchestration service.

Drives one search pass:
    free-text search -> type matching -> outline enrichment -> specificity filter

Only the free-text search can fail the call. Outline loading and type
matching degrade to an empty result list.
"""

import logging

from article_guidance.config import settings
from article_guidance.entities import EntityCandidate, MatchMap, OutlineType, SearchResult
from article_guidance.exceptions import OutlineLoadError
from article_guidance.protocols import EntityRepository
from article_guidance.services.outline_registry import OutlineRegistry
from article_guidance.services.specificity import filter_most_specific
from article_guidance.services.type_matcher import TypeMatcher

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Turns a free-text query into outline-matched search results.

    Example:
        ```python
        orchestrator = SearchOrchestrator(
            entity_repository=WikidataApiClient.create(),
            outline_registry=registry,
            type_matcher=TypeMatcher(SparqlGraphClient.create()),
        )

        results = await orchestrator.search("cat", "en")
        ```
    """

    def __init__(
        self,
        entity_repository: EntityRepository,
        outline_registry: OutlineRegistry,
        type_matcher: TypeMatcher,
        search_limit: int | None = None,
        min_query_length: int | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            entity_repository: Free-text entity search (required).
            outline_registry: Process-wide outline holder (required).
            type_matcher: Batched type matcher (required).
            search_limit: Maximum search hits per query. Defaults to settings.
            min_query_length: Shortest query that triggers a search. Defaults to settings.
        """
        self._entities = entity_repository
        self._outlines = outline_registry
        self._matcher = type_matcher
        self._limit = search_limit or settings.search_limit
        self._min_length = min_query_length or settings.search_min_length

    def accepts(self, query: str | None) -> bool:
        """Check whether a query is long enough to search for."""
        return bool(query) and len(query.strip()) >= self._min_length

    async def search(self, query: str, language: str) -> list[SearchResult]:
        """Search entities and keep those matching a supported outline type.

        Business logic:
        1. Ignore queries shorter than the minimum length
        2. Free-text search (errors propagate)
        3. Load outlines once per process and collect their type ids
        4. Match all candidates against all types in one batch
        5. Attach the matched outline's depth and thumbnail
        6. Keep only the most specific match(es) per entity

        Args:
            query: Free-text query
            language: Language code

        Returns:
            Search results, grouped per entity in search order

        Raises:
            EntitySearchError: If the free-text search fails
        """
        if not self.accepts(query):
            return []

        candidates = await self._entities.search_entities(query.strip(), language, self._limit)
        if not candidates:
            return []

        try:
            outlines = await self._outlines.get_outlines()
        except OutlineLoadError as e:
            logger.warning("Outline loading failed, returning no matches: %s", e)
            return []

        type_ids = [outline.type_id for outline in outlines if outline.type_id]
        if not type_ids:
            logger.debug("No outline types configured, returning no matches")
            return []

        matches = await self._matcher.find_matches([c.id for c in candidates], type_ids)
        results = self._build_results(candidates, matches, outlines)
        return filter_most_specific(results)

    def _build_results(
        self,
        candidates: list[EntityCandidate],
        matches: MatchMap,
        outlines: list[OutlineType],
    ) -> list[SearchResult]:
        depths: dict[str, int] = {}
        thumbnails: dict[str, str] = {}
        for outline in outlines:
            if not outline.type_id:
                continue
            if outline.hierarchy_depth is not None:
                depths[outline.type_id] = outline.hierarchy_depth
            if outline.thumbnail:
                thumbnails[outline.type_id] = outline.thumbnail

        results = []
        for candidate in candidates:
            for type_id in matches.get(candidate.id, []):
                results.append(
                    SearchResult(
                        entity_id=candidate.id,
                        label=candidate.label,
                        description=candidate.description,
                        source_url=candidate.source_url,
                        matched_type_id=type_id,
                        hierarchy_depth=depths.get(type_id) or 0,
                        thumbnail=thumbnails.get(type_id),
                    )
                )
        return results
