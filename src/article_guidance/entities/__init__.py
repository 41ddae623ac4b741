"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntry
from .entity_metadata import EntityId, EntityMetadata, is_valid_entity_id
from .outline_type import OutlineType
from .search_result import EntityCandidate, MatchMap, SearchResult

__all__ = [
    "CacheEntry",
    "EntityCandidate",
    "EntityId",
    "EntityMetadata",
    "MatchMap",
    "OutlineType",
    "SearchResult",
    "is_valid_entity_id",
]
