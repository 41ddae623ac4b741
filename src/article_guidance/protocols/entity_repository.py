"""Entity repository protocol.

Defines access to the entity service: free-text search and per-entity
label/description/claim lookup.
"""

from typing import Any, Protocol, runtime_checkable

from article_guidance.entities import EntityCandidate, EntityId


@runtime_checkable
class EntityRepository(Protocol):
    """Protocol for entity services (Wikidata action API by default)."""

    async def search_entities(
        self,
        text: str,
        language: str,
        limit: int,
    ) -> list[EntityCandidate]:
        """Free-text search for items.

        Args:
            text: Search text
            language: Language code for labels and matching
            limit: Maximum number of candidates

        Returns:
            Candidates in relevance order

        Raises:
            EntitySearchError: If the search request fails
        """
        ...

    async def fetch_entity_content(
        self,
        entity_id: EntityId,
        language: str,
    ) -> dict[str, Any] | None:
        """Fetch raw label, description and image file name for one entity.

        Args:
            entity_id: Item id
            language: Language code

        Returns:
            Dict with "label", "description" and "image" (a Commons file name),
            any of which may be None; None on any failure
        """
        ...
