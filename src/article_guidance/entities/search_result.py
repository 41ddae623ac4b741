"""Search pipeline domain entities."""

from dataclasses import dataclass

from .entity_metadata import EntityId

# candidate id -> matched outline type ids (no duplicates)
MatchMap = dict[EntityId, list[EntityId]]


@dataclass(frozen=True)
class EntityCandidate:
    """A single hit from the free-text entity search.

    Attributes:
        id: Wikidata item id
        label: Display label (the id when the item has no label)
        description: Short description, empty when missing
        source_url: Concept URI of the item
    """

    id: EntityId
    label: str
    description: str
    source_url: str


@dataclass(frozen=True)
class SearchResult:
    """A candidate entity paired with one outline type it matched.

    Attributes:
        entity_id: Matched candidate id
        label: Candidate label
        description: Candidate description
        source_url: Candidate concept URI
        matched_type_id: Outline type the candidate is an instance/taxon of
        hierarchy_depth: Depth of the matched outline type (0 when unknown)
        thumbnail: Thumbnail of the matched outline type
    """

    entity_id: EntityId
    label: str
    description: str
    source_url: str
    matched_type_id: EntityId
    hierarchy_depth: int = 0
    thumbnail: str | None = None
