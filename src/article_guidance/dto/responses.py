"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SearchResultItem(BaseModel):
    """Single search result (in results array)."""

    entity_id: str = Field(..., description="Matched Wikidata item id")
    label: str = Field(..., description="Item label")
    description: str = Field("", description="Item description")
    source_url: str = Field(..., description="Concept URI of the item")
    matched_type_id: str = Field(..., description="Outline type the item matched")
    hierarchy_depth: int = Field(0, description="Depth of the matched type (0 = unknown)", ge=0)
    thumbnail: str | None = Field(None, description="Thumbnail of the matched outline type")


class SearchResponse(BaseModel):
    """Response DTO for the search operation."""

    query: str = Field(..., description="The original query")
    language: str = Field(..., description="Language used for the search")
    results: list[SearchResultItem] = Field(
        default_factory=list,
        description="Most specific outline matches, grouped per entity",
    )
    lookup_time_ms: float = Field(..., description="Time taken for the search in milliseconds")


class EntityMetadataResponse(BaseModel):
    """Response DTO for a single resolved entity."""

    id: str = Field(..., description="Wikidata item id")
    label: str | None = Field(None, description="Label in the requested language")
    description: str | None = Field(None, description="Description in the requested language")
    image: str | None = Field(None, description="Commons thumbnail URL")
    hierarchy_depth: int | None = Field(
        None,
        description="Specificity depth; null when the depth lookup failed",
        ge=0,
    )


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    outlines_loaded: bool = Field(..., description="Whether the outline set is loaded")


class OutlineInvalidateResponse(BaseModel):
    """Response DTO for outline invalidation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")
