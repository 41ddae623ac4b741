"""Outline source protocol."""

from typing import Protocol, runtime_checkable

from article_guidance.entities import OutlineType


@runtime_checkable
class OutlineSource(Protocol):
    """Protocol for whatever serves the outline definitions."""

    async def load_outlines(self) -> list[OutlineType]:
        """Load every outline definition.

        Returns:
            Outlines in listing order

        Raises:
            OutlineLoadError: If the outlines cannot be fetched
        """
        ...
