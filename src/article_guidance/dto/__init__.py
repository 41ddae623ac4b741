"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import SearchParams
from .responses import (
    EntityMetadataResponse,
    HealthCheckResponse,
    OutlineInvalidateResponse,
    SearchResponse,
    SearchResultItem,
)

__all__ = [
    "SearchParams",
    "SearchResultItem",
    "SearchResponse",
    "EntityMetadataResponse",
    "HealthCheckResponse",
    "OutlineInvalidateResponse",
]
