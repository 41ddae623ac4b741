"""Process-wide outline registry.

Holds the outline definitions for the lifetime of the process. There is
exactly one registry per application; it is created in the API lifespan
and handed to the services that need it, never imported as a global.

Lifecycle:
    created  -> nothing loaded, no I/O
    get_outlines() -> first call loads; concurrent callers share that load
    invalidate() -> forget the loaded set; the next call reloads
"""

import asyncio
import logging

from article_guidance.config import settings
from article_guidance.entities import EntityId, OutlineType
from article_guidance.protocols import OutlineSource

logger = logging.getLogger(__name__)


class OutlineRegistry:
    """Lazily loaded, single-flight holder of the outline set.

    Example:
        ```python
        registry = OutlineRegistry(RestOutlineSource.create())
        outlines = await registry.get_outlines()
        registry.invalidate()
        ```
    """

    def __init__(self, source: OutlineSource, enabled: bool | None = None) -> None:
        """Initialize the registry.

        Args:
            source: Where outlines are loaded from (required).
            enabled: When False, no outlines are ever loaded. Defaults to settings.
        """
        self._source = source
        self._enabled = settings.outlines_enabled if enabled is None else enabled
        self._outlines: list[OutlineType] | None = None
        self._loading: asyncio.Task | None = None
        self._generation = 0

    async def get_outlines(self) -> list[OutlineType]:
        """Return the outline set, loading it once if needed.

        Returns:
            Loaded outlines; empty when outlines are disabled

        Raises:
            OutlineLoadError: If the load failed; the failure is not remembered
        """
        if not self._enabled:
            return []
        if self._outlines is not None:
            return self._outlines

        if self._loading is None:
            self._loading = asyncio.ensure_future(self._load(self._generation))
        return await asyncio.shield(self._loading)

    def invalidate(self) -> None:
        """Drop the loaded outlines so the next access reloads them.

        A load already in flight is detached: it still answers its own
        callers but no longer fills the registry.
        """
        self._outlines = None
        self._loading = None
        self._generation += 1
        logger.info("Outline registry invalidated")

    def outline_for(self, type_id: EntityId) -> OutlineType | None:
        """Find the loaded outline bound to a type, if any."""
        for outline in self._outlines or []:
            if outline.type_id == type_id:
                return outline
        return None

    @property
    def is_loaded(self) -> bool:
        """Whether an outline set is currently held."""
        return self._outlines is not None

    @property
    def enabled(self) -> bool:
        """Whether outlines are loaded at all."""
        return self._enabled

    async def _load(self, generation: int) -> list[OutlineType]:
        try:
            outlines = await self._source.load_outlines()
            if generation == self._generation:
                self._outlines = outlines
                logger.info("Loaded %d outlines", len(outlines))
            else:
                logger.debug("Discarding outlines loaded before invalidation")
            return outlines
        finally:
            if generation == self._generation:
                self._loading = None
