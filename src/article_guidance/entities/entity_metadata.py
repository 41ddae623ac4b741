"""Entity metadata domain entity."""

import re
from dataclasses import asdict, dataclass
from typing import Any

EntityId = str

_ENTITY_ID_RE = re.compile(r"^Q\d+$")


def is_valid_entity_id(entity_id: str | None) -> bool:
    """Check that a string looks like a Wikidata item id (Q followed by digits)."""
    if not entity_id:
        return False
    return bool(_ENTITY_ID_RE.match(entity_id.strip()))


@dataclass(frozen=True)
class EntityMetadata:
    """Resolved label, description, image and hierarchy depth of one entity.

    Attributes:
        id: Wikidata item id (e.g. "Q5")
        label: Label in the requested language
        description: Description in the requested language
        image: Commons thumbnail URL derived from the P18 claim
        hierarchy_depth: Specificity signal; None when the depth lookup failed
    """

    id: EntityId
    label: str | None = None
    description: str | None = None
    image: str | None = None
    hierarchy_depth: int | None = None

    @property
    def has_content(self) -> bool:
        """False when label, description and image are all missing."""
        return bool(self.label or self.description or self.image)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EntityMetadata":
        depth = data.get("hierarchy_depth")
        return cls(
            id=data["id"],
            label=data.get("label"),
            description=data.get("description"),
            image=data.get("image"),
            hierarchy_depth=int(depth) if depth is not None else None,
        )
