"""Type matching service.

Defines the batching boundary for type matching: the caller decides which
candidates go into one batch, and the matcher issues exactly one graph
query for it.
"""

from article_guidance.entities import EntityId, MatchMap
from article_guidance.protocols import GraphQueryClient


def _dedupe(ids: list[EntityId]) -> list[EntityId]:
    return list(dict.fromkeys(entity_id for entity_id in ids if entity_id))


class TypeMatcher:
    """Batch-matches candidate entities against supported outline types."""

    def __init__(self, graph_client: GraphQueryClient) -> None:
        """Initialize the matcher.

        Args:
            graph_client: Graph backend answering match_types (required).
        """
        self._graph = graph_client

    async def find_matches(
        self,
        candidates: list[EntityId],
        supported_types: list[EntityId],
    ) -> MatchMap:
        """Find every supported type each candidate belongs to.

        Args:
            candidates: Candidate item ids, typically search hits
            supported_types: Outline type ids

        Returns:
            Map of candidate id to matched type ids; only ids from the inputs appear
        """
        candidate_ids = _dedupe(candidates)
        type_ids = _dedupe(supported_types)
        if not candidate_ids or not type_ids:
            return {}

        raw = await self._graph.match_types(candidate_ids, type_ids)

        allowed_candidates = set(candidate_ids)
        allowed_types = set(type_ids)
        matches: MatchMap = {}
        for candidate_id, type_list in raw.items():
            if candidate_id not in allowed_candidates:
                continue
            matched = [type_id for type_id in dict.fromkeys(type_list) if type_id in allowed_types]
            if matched:
                matches[candidate_id] = matched
        return matches
