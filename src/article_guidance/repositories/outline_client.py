"""REST outline source.

Reads the outline listing (`{"outlines": [...]}`) served by the wiki's
article guidance REST route.
"""

import httpx

from article_guidance.config import settings
from article_guidance.entities import OutlineType
from article_guidance.exceptions import OutlineLoadError


class RestOutlineSource:
    """HTTP implementation of the OutlineSource protocol.

    This class satisfies the OutlineSource protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        outlines_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the outline source.

        Args:
            outlines_url: Listing endpoint. Defaults to settings.outlines_url.
            timeout: Request timeout in seconds. Defaults to settings.http_timeout.
            client: Pre-built HTTP client (tests inject a mock transport here).
        """
        self._outlines_url = outlines_url or settings.outlines_url
        self._timeout = timeout or settings.http_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": settings.http_user_agent},
            )
        return self._client

    @classmethod
    def create(cls, outlines_url: str | None = None) -> "RestOutlineSource":
        """Factory method to create RestOutlineSource with defaults."""
        return cls(outlines_url=outlines_url)

    async def load_outlines(self) -> list[OutlineType]:
        """Fetch every outline definition.

        Returns:
            Outlines in listing order

        Raises:
            OutlineLoadError: If the request fails or the body is malformed
        """
        try:
            response = await self.client.get(self._outlines_url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise OutlineLoadError(f"Failed to fetch outlines: {e}") from e

        raw_outlines = data.get("outlines") if isinstance(data, dict) else None
        if raw_outlines is None:
            return []
        if not isinstance(raw_outlines, list):
            raise OutlineLoadError("Failed to fetch outlines: 'outlines' is not a list")

        try:
            return [OutlineType.from_dict(item) for item in raw_outlines]
        except (AttributeError, TypeError, ValueError) as e:
            raise OutlineLoadError(f"Failed to parse outlines: {e}") from e

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
