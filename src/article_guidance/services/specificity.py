"""Most-specific-type selection for multi-type matches."""

from article_guidance.entities import EntityId, SearchResult


def filter_most_specific(results: list[SearchResult]) -> list[SearchResult]:
    """Keep, per entity, only the matches at that entity's deepest type.

    The maximum is taken per entity, not across the whole list. An entity
    whose matches carry no depth (all 0) keeps every match.

    Args:
        results: Search results, possibly several per entity

    Returns:
        Filtered results grouped by first appearance of each entity,
        original order within each group
    """
    groups: dict[EntityId, list[SearchResult]] = {}
    for result in results:
        groups.setdefault(result.entity_id, []).append(result)

    filtered: list[SearchResult] = []
    for members in groups.values():
        max_depth = max((member.hierarchy_depth or 0 for member in members), default=0)
        max_depth = max(max_depth, 0)
        if max_depth > 0:
            filtered.extend(member for member in members if member.hierarchy_depth == max_depth)
        else:
            filtered.extend(members)
    return filtered
