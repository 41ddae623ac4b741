"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SearchParams(BaseModel):
    """Query parameters for searching outline-matched entities.

    The handler will convert this to internal calls to the service layer.
    """

    q: str = Field(..., description="Free-text entity query")
    language: str = Field("en", description="Language code for labels and matching", min_length=1)
