"""Graph query protocol.

Defines the read-only queries the engine needs from a knowledge graph
that supports unbounded transitive path traversal (e.g. a SPARQL endpoint).
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from article_guidance.entities import EntityId, MatchMap


@runtime_checkable
class GraphQueryClient(Protocol):
    """Protocol for graph query backends.

    Both methods fail open: implementations log transport and parse errors
    and return an empty or None result instead of raising.
    """

    async def match_types(
        self,
        candidate_ids: Iterable[EntityId],
        type_ids: Iterable[EntityId],
    ) -> MatchMap:
        """Find every (candidate, type) pair connected by a type relation.

        A candidate matches a type through "instance of / subclass of*" or
        through "parent taxon*".

        Args:
            candidate_ids: Entities to classify
            type_ids: Supported outline types

        Returns:
            Mapping of candidate id to the type ids it matched
        """
        ...

    async def compute_hierarchy_depth(self, entity_id: EntityId) -> int | None:
        """Compute the specificity depth of an entity.

        Args:
            entity_id: The entity to measure

        Returns:
            Depth (0 is a valid root-level answer), or None on failure
        """
        ...
