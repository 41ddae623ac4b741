"""Interactive search session.

Wraps SearchOrchestrator for type-as-you-go input:
- input is debounced; a new keystroke restarts the quiet window
- searches already in flight are never cancelled, their results are
  dropped on completion if the query (or language) has moved on
"""

import asyncio
import logging

from article_guidance.config import settings
from article_guidance.entities import SearchResult
from article_guidance.exceptions import ArticleGuidanceError
from article_guidance.services.search_orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)


class InteractiveSearchSession:
    """Debounced, stale-safe search state for one user.

    Must be driven from inside a running event loop.

    Attributes:
        results: Results of the latest applicable search
        loading: True while the current query's search is pending
        error: Message of the last free-text search failure, or None
        stale_discards: Number of completed searches dropped as stale
    """

    def __init__(
        self,
        orchestrator: SearchOrchestrator,
        language: str = "en",
        debounce_seconds: float | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._language = language
        self._debounce = settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        self._query = ""
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

        self.results: list[SearchResult] = []
        self.loading = False
        self.error: str | None = None
        self.stale_discards = 0

    @property
    def query(self) -> str:
        return self._query

    @property
    def language(self) -> str:
        return self._language

    def update_query(self, text: str | None) -> None:
        """Record new input and (re)start the debounce window."""
        self._cancel_timer()
        self._query = text or ""

        if not self._orchestrator.accepts(self._query):
            self.results = []
            self.loading = False
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce, self._start, self._query, self._language)

    def set_language(self, language: str) -> None:
        """Switch language and re-run the current query right away."""
        self._language = language
        if self._orchestrator.accepts(self._query):
            self._cancel_timer()
            self._start(self._query, language)

    async def wait_idle(self) -> None:
        """Wait until no debounce timer is pending and no search is running."""
        while self._timer is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks))
            else:
                await asyncio.sleep(self._debounce / 2 or 0)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _start(self, query: str, language: str) -> None:
        self._timer = None
        self.loading = True
        self.error = None
        task = asyncio.ensure_future(self._run(query, language))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_current(self, query: str, language: str) -> bool:
        return query == self._query and language == self._language

    async def _run(self, query: str, language: str) -> None:
        try:
            results = await self._orchestrator.search(query, language)
        except ArticleGuidanceError as e:
            if not self._is_current(query, language):
                self.stale_discards += 1
                return
            logger.warning("Search failed for %r: %s", query, e)
            self.error = str(e) or "Failed to search Wikidata"
            self.results = []
            self.loading = False
            return
        except Exception:
            if not self._is_current(query, language):
                self.stale_discards += 1
                return
            logger.exception("Unexpected failure searching for %r", query)
            self.results = []
            self.loading = False
            return

        if not self._is_current(query, language):
            self.stale_discards += 1
            logger.debug("Discarding stale results for %r", query)
            return

        self.results = results
        self.loading = False
