"""Outline type domain entity."""

from dataclasses import dataclass
from typing import Any

from .entity_metadata import EntityId


@dataclass(frozen=True)
class OutlineType:
    """A curated guidance outline bound to one supported entity type.

    Outlines are owned by the outline listing service and treated as
    read-only once loaded.

    Attributes:
        type_id: Supported Wikidata type (e.g. "Q729"); None if the page has none
        display_title: Title of the outline page
        label: Type label, falls back to the type id
        description: Type description, first letter capitalized
        instructions_html: Rendered guidance instructions
        thumbnail: Commons thumbnail URL for the type
        hierarchy_depth: Depth of the type in the ontology, if known
        notability_risk: Whether articles of this type often fail notability
    """

    type_id: EntityId | None
    display_title: str
    label: str
    description: str = ""
    instructions_html: str | None = None
    thumbnail: str | None = None
    hierarchy_depth: int | None = None
    notability_risk: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OutlineType":
        """Build an outline from the outline listing's JSON shape."""
        type_id = data.get("articleType") or None
        description = data.get("description") or ""
        if description:
            description = description[0].upper() + description[1:]
        depth = data.get("hierarchyDepth")

        return cls(
            type_id=type_id,
            display_title=data.get("title", ""),
            label=data.get("label") or type_id or "",
            description=description,
            instructions_html=data.get("instructions"),
            thumbnail=data.get("thumbnail") or None,
            hierarchy_depth=int(depth) if depth is not None else None,
            notability_risk=bool(data.get("notabilityRisk", False)),
        )
