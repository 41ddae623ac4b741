"""SPARQL-based graph query client.

Runs read-only queries against the Wikidata Query Service (or any SPARQL
1.1 endpoint holding Wikidata-shaped data) and parses the tabular JSON
bindings into typed maps.

Two relations connect an item to a supported type:
- Regular items: P31 (instance of) followed by P279* (subclass of)
- Taxons: P171* (parent taxon), e.g. "Felis catus" up to "Animal" (Q729)

The `*` property path operator means zero or more steps, so traversal
depth is unbounded and left to the endpoint.
"""

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from article_guidance.config import settings
from article_guidance.entities import EntityId, MatchMap, is_valid_entity_id

logger = logging.getLogger(__name__)

ENTITY_URI_PREFIX = "http://www.wikidata.org/entity/"

PREFIXES = """PREFIX wd: <http://www.wikidata.org/entity/>
PREFIX wdt: <http://www.wikidata.org/prop/direct/>
"""


def _unique_ids(ids: Iterable[EntityId]) -> list[EntityId]:
    """Order-preserving de-duplication that drops ids unsafe to inline."""
    seen: dict[EntityId, None] = {}
    for entity_id in ids:
        if not is_valid_entity_id(entity_id):
            logger.warning("Skipping invalid entity id in graph query: %r", entity_id)
            continue
        seen.setdefault(entity_id.strip(), None)
    return list(seen)


def _values(ids: list[EntityId]) -> str:
    return " ".join(f"wd:{entity_id}" for entity_id in ids)


def build_match_query(candidate_ids: list[EntityId], type_ids: list[EntityId]) -> str:
    """Build the batched UNION query matching candidates to supported types."""
    return f"""{PREFIXES}SELECT ?specificItem ?supportedType WHERE {{
  VALUES ?specificItem {{ {_values(candidate_ids)} }}
  VALUES ?supportedType {{ {_values(type_ids)} }}
  {{
    ?specificItem wdt:P31/wdt:P279* ?supportedType .
  }} UNION {{
    ?specificItem wdt:P171* ?supportedType .
  }}
}}"""


def build_depth_query(entity_id: EntityId) -> str:
    """Build the query returning the larger of the P279* and P171* ancestor counts."""
    return f"""{PREFIXES}SELECT (MAX(?depth) AS ?maxDepth) WHERE {{
  {{
    SELECT (COUNT(?intermediate) AS ?depth) WHERE {{
      wd:{entity_id} wdt:P279* ?intermediate .
    }}
  }} UNION {{
    SELECT (COUNT(?intermediate) AS ?depth) WHERE {{
      wd:{entity_id} wdt:P171* ?intermediate .
    }}
  }}
}}"""


def _entity_id_from_uri(uri: str) -> EntityId:
    if uri.startswith(ENTITY_URI_PREFIX):
        return uri[len(ENTITY_URI_PREFIX):]
    return uri.rsplit("/", 1)[-1]


class SparqlGraphClient:
    """SPARQL implementation of the GraphQueryClient protocol.

    This class satisfies the GraphQueryClient protocol through structural
    typing - no explicit inheritance needed.

    Both queries fail open: on transport errors, non-2xx responses or
    unexpected JSON the client logs and returns an empty/None result.

    Example:
        ```python
        client = SparqlGraphClient.create()

        matches = await client.match_types(["Q146"], ["Q729"])
        print(matches)  # {"Q146": ["Q729"]}

        depth = await client.compute_hierarchy_depth("Q146")
        ```
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the SPARQL client.

        Args:
            endpoint_url: SPARQL endpoint. Defaults to settings.sparql_endpoint_url.
            user_agent: User-Agent header. Defaults to settings.http_user_agent.
            timeout: Request timeout in seconds. Defaults to settings.http_timeout.
            client: Pre-built HTTP client (tests inject a mock transport here).
        """
        self._endpoint_url = endpoint_url or settings.sparql_endpoint_url
        self._user_agent = user_agent or settings.http_user_agent
        self._timeout = timeout or settings.http_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        endpoint_url: str | None = None,
        user_agent: str | None = None,
    ) -> "SparqlGraphClient":
        """Factory method to create SparqlGraphClient with defaults.

        Args:
            endpoint_url: SPARQL endpoint. If None, uses settings.
            user_agent: User-Agent header. If None, uses settings.

        Returns:
            Configured SparqlGraphClient
        """
        return cls(endpoint_url=endpoint_url, user_agent=user_agent)

    async def query(self, sparql: str) -> list[dict[str, Any]]:
        """Execute a query and return its result bindings.

        Args:
            sparql: The SPARQL query text

        Returns:
            The `results.bindings` rows

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            ValueError: If the body is not the SPARQL JSON results format
        """
        response = await self.client.get(
            self._endpoint_url,
            params={"query": sparql, "format": "json"},
            headers={
                "Accept": "application/sparql-results+json",
                "User-Agent": self._user_agent,
            },
        )
        response.raise_for_status()
        data = response.json()

        bindings = data.get("results", {}).get("bindings") if isinstance(data, dict) else None
        if not isinstance(bindings, list):
            raise ValueError(f"Unexpected SPARQL response format: {str(data)[:200]}")
        return bindings

    async def match_types(
        self,
        candidate_ids: Iterable[EntityId],
        type_ids: Iterable[EntityId],
    ) -> MatchMap:
        """Find all supported types each candidate belongs to.

        Args:
            candidate_ids: Item ids from search results (e.g. ["Q937", "Q243"])
            type_ids: Item ids of outline types (e.g. ["Q5", "Q33506"])

        Returns:
            Map of {candidate_id: [type_id, ...]}; empty on failure
        """
        candidates = _unique_ids(candidate_ids)
        types = _unique_ids(type_ids)
        if not candidates or not types:
            return {}

        try:
            bindings = await self.query(build_match_query(candidates, types))

            matches: MatchMap = {}
            for binding in bindings:
                specific = _entity_id_from_uri(binding["specificItem"]["value"])
                supported = _entity_id_from_uri(binding["supportedType"]["value"])
                matched = matches.setdefault(specific, [])
                if supported not in matched:
                    matched.append(supported)
            return matches

        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning("SPARQL type matching failed, returning no matches: %s", e)
            return {}

    async def compute_hierarchy_depth(self, entity_id: EntityId) -> int | None:
        """Count the ancestors of an entity along P279* and P171*.

        The larger of the two counts is used, so regular items get their
        subclass depth and taxons their parent-taxon depth.

        Args:
            entity_id: Item id

        Returns:
            Hierarchy depth, or None if the query failed
        """
        if not is_valid_entity_id(entity_id):
            return None

        try:
            bindings = await self.query(build_depth_query(entity_id.strip()))
            if not bindings or "maxDepth" not in bindings[0]:
                return None
            return int(bindings[0]["maxDepth"]["value"])

        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning("SPARQL depth query failed for %s (graceful degradation): %s", entity_id, e)
            return None

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
