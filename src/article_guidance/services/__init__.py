"""Service layer for business logic.

This layer contains the type resolution and specificity logic.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from article_guidance.services import SearchOrchestrator, TypeMatcher

    matcher = TypeMatcher(graph_client=SparqlGraphClient.create())
    matches = await matcher.find_matches(["Q146"], ["Q729"])
    ```
"""

from .entity_metadata_fetcher import EntityMetadataFetcher
from .interactive_search import InteractiveSearchSession
from .outline_registry import OutlineRegistry
from .search_orchestrator import SearchOrchestrator
from .specificity import filter_most_specific
from .stampede_cache import StampedeSafeCache
from .type_matcher import TypeMatcher

__all__ = [
    "EntityMetadataFetcher",
    "InteractiveSearchSession",
    "OutlineRegistry",
    "SearchOrchestrator",
    "StampedeSafeCache",
    "TypeMatcher",
    "filter_most_specific",
]
