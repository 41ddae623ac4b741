"""Wikidata action API client.

Implements the EntityRepository protocol over two action API modules:
- wbsearchentities: free-text item search
- wbgetentities: labels, descriptions and claims of a single item
"""

import logging
from typing import Any

import httpx

from article_guidance.config import settings
from article_guidance.entities import EntityCandidate, EntityId, is_valid_entity_id
from article_guidance.exceptions import EntitySearchError

logger = logging.getLogger(__name__)

IMAGE_PROPERTY = "P18"


class WikidataApiClient:
    """Wikidata implementation of the EntityRepository protocol.

    This class satisfies the EntityRepository protocol through structural
    typing - no explicit inheritance needed.

    Search failures raise EntitySearchError because the caller shows them;
    entity content lookups fail open and return None.

    Example:
        ```python
        client = WikidataApiClient.create()
        candidates = await client.search_entities("cat", "en", limit=10)
        content = await client.fetch_entity_content("Q146", "en")
        ```
    """

    def __init__(
        self,
        api_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Wikidata client.

        Args:
            api_url: Action API endpoint. Defaults to settings.wikidata_api_url.
            user_agent: User-Agent header. Defaults to settings.http_user_agent.
            timeout: Request timeout in seconds. Defaults to settings.http_timeout.
            client: Pre-built HTTP client (tests inject a mock transport here).
        """
        self._api_url = api_url or settings.wikidata_api_url
        self._user_agent = user_agent or settings.http_user_agent
        self._timeout = timeout or settings.http_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
            )
        return self._client

    @classmethod
    def create(cls, api_url: str | None = None) -> "WikidataApiClient":
        """Factory method to create WikidataApiClient with defaults.

        Args:
            api_url: Action API endpoint. If None, uses settings.

        Returns:
            Configured WikidataApiClient
        """
        return cls(api_url=api_url)

    async def _get(self, params: dict[str, str]) -> Any:
        response = await self.client.get(self._api_url, params={**params, "format": "json"})
        response.raise_for_status()
        return response.json()

    async def search_entities(
        self,
        text: str,
        language: str,
        limit: int = 20,
    ) -> list[EntityCandidate]:
        """Search Wikidata items by free text.

        Args:
            text: Search query
            language: Language code
            limit: Maximum number of results

        Returns:
            Matching items in relevance order

        Raises:
            EntitySearchError: If the request fails or returns an error body
        """
        text = text.strip() if text else ""
        if not text:
            return []

        try:
            data = await self._get(
                {
                    "action": "wbsearchentities",
                    "type": "item",
                    "search": text,
                    "language": language,
                    "uselang": language,
                    "limit": str(limit),
                }
            )
        except (httpx.HTTPError, ValueError) as e:
            raise EntitySearchError(f"Failed to search Wikidata: {e}") from e

        if not isinstance(data, dict):
            raise EntitySearchError("Failed to search Wikidata: unexpected response body")
        if "error" in data:
            error = data["error"]
            info = error.get("info", error) if isinstance(error, dict) else error
            raise EntitySearchError(f"Failed to search Wikidata: {info}")

        hits = data.get("search")
        if hits is None:
            return []
        if not isinstance(hits, list):
            raise EntitySearchError("Failed to search Wikidata: 'search' is not a list")

        candidates = []
        for item in hits:
            if not isinstance(item, dict):
                raise EntitySearchError(f"Failed to search Wikidata: unexpected search hit {item!r}")
            entity_id = item.get("id")
            if not entity_id:
                continue
            candidates.append(
                EntityCandidate(
                    id=entity_id,
                    label=item.get("label") or entity_id,
                    description=item.get("description") or "",
                    source_url=item.get("concepturi") or f"https://www.wikidata.org/wiki/{entity_id}",
                )
            )
        return candidates

    async def fetch_entity_content(
        self,
        entity_id: EntityId,
        language: str,
    ) -> dict[str, Any] | None:
        """Fetch label, description and P18 image file name of one item.

        Args:
            entity_id: Item id
            language: Language code

        Returns:
            {"label", "description", "image"} with None for missing values,
            or None on any failure
        """
        if not is_valid_entity_id(entity_id):
            return None

        try:
            data = await self._get(
                {
                    "action": "wbgetentities",
                    "props": "labels|descriptions|claims",
                    "ids": entity_id,
                    "languages": language,
                }
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error("wbgetentities request failed for %s: %s", entity_id, e)
            return None

        try:
            entity = data["entities"][entity_id]
        except (KeyError, TypeError):
            logger.error("Invalid Wikidata API response format for %s", entity_id)
            return None

        try:
            label = (entity.get("labels") or {}).get(language, {}).get("value")
            description = (entity.get("descriptions") or {}).get(language, {}).get("value")
            image = None
            claims = (entity.get("claims") or {}).get(IMAGE_PROPERTY) or []
            if claims:
                value = claims[0].get("mainsnak", {}).get("datavalue", {}).get("value")
                if isinstance(value, str) and value:
                    image = value
        except (AttributeError, IndexError, TypeError) as e:
            logger.warning("Failed to parse wbgetentities response for %s: %s", entity_id, e)
            return None

        return {"label": label, "description": description, "image": image}

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
