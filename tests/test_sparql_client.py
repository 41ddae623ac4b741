"""
Tests for the SPARQL graph query client.
"""

import httpx
import pytest

from article_guidance.repositories import SparqlGraphClient

ENTITY = "http://www.wikidata.org/entity/"


def _client(handler) -> SparqlGraphClient:
    return SparqlGraphClient(
        endpoint_url="https://sparql.test/sparql",
        user_agent="article-guidance-tests",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _bindings(rows: list[dict]) -> dict:
    return {"head": {"vars": []}, "results": {"bindings": rows}}


def _uri(entity_id: str) -> dict:
    return {"type": "uri", "value": f"{ENTITY}{entity_id}"}


@pytest.mark.asyncio
async def test_match_types_builds_batched_union_query():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_bindings([]))

    client = _client(handler)
    await client.match_types(["Q146", "Q42"], ["Q729", "Q5"])

    assert len(seen) == 1
    request = seen[0]
    query = request.url.params["query"]
    assert request.url.params["format"] == "json"
    assert "VALUES ?specificItem { wd:Q146 wd:Q42 }" in query
    assert "VALUES ?supportedType { wd:Q729 wd:Q5 }" in query
    assert "wdt:P31/wdt:P279* ?supportedType" in query
    assert "wdt:P171* ?supportedType" in query
    assert "UNION" in query
    assert request.headers["Accept"] == "application/sparql-results+json"
    assert request.headers["User-Agent"] == "article-guidance-tests"


@pytest.mark.asyncio
async def test_match_types_parses_all_pairs():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=_bindings(
                [
                    {"specificItem": _uri("Q146"), "supportedType": _uri("Q729")},
                    {"specificItem": _uri("Q146"), "supportedType": _uri("Q39201")},
                    {"specificItem": _uri("Q146"), "supportedType": _uri("Q729")},
                    {"specificItem": _uri("Q42"), "supportedType": _uri("Q5")},
                ]
            ),
        )

    matches = await _client(handler).match_types(["Q146", "Q42"], ["Q729", "Q39201", "Q5"])

    assert matches == {"Q146": ["Q729", "Q39201"], "Q42": ["Q5"]}


@pytest.mark.asyncio
async def test_match_types_empty_input_makes_no_request():
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json=_bindings([]))

    client = _client(handler)
    assert await client.match_types([], ["Q5"]) == {}
    assert await client.match_types(["Q5"], []) == {}
    assert calls == 0


@pytest.mark.asyncio
async def test_match_types_never_inlines_invalid_ids():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params["query"])
        return httpx.Response(200, json=_bindings([]))

    await _client(handler).match_types(["Q1", "Q2 } DROP"], ["Q5"])

    assert "DROP" not in seen[0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="Internal error"),
        httpx.Response(429, text="Too many requests"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"unexpected": True}),
        httpx.Response(200, json=_bindings([{"specificItem": _uri("Q146")}])),
    ],
)
async def test_match_types_fails_open(response):
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    assert await _client(handler).match_types(["Q146"], ["Q729"]) == {}


@pytest.mark.asyncio
async def test_match_types_transport_error_fails_open():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    assert await _client(handler).match_types(["Q146"], ["Q729"]) == {}


@pytest.mark.asyncio
async def test_depth_query_counts_both_relations():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params["query"])
        return httpx.Response(
            200,
            json=_bindings([{"maxDepth": {"type": "literal", "value": "7"}}]),
        )

    depth = await _client(handler).compute_hierarchy_depth("Q146")

    assert depth == 7
    assert "wd:Q146 wdt:P279* ?intermediate" in seen[0]
    assert "wd:Q146 wdt:P171* ?intermediate" in seen[0]
    assert "MAX(?depth)" in seen[0]


@pytest.mark.asyncio
async def test_depth_zero_is_not_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_bindings([{"maxDepth": {"type": "literal", "value": "0"}}]))

    assert await _client(handler).compute_hierarchy_depth("Q35120") == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="unavailable"),
        httpx.Response(200, text="garbage"),
        httpx.Response(200, json=_bindings([])),
        httpx.Response(200, json=_bindings([{"maxDepth": {"type": "literal", "value": "many"}}])),
    ],
)
async def test_depth_failure_returns_none(response):
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    assert await _client(handler).compute_hierarchy_depth("Q146") is None


@pytest.mark.asyncio
async def test_depth_invalid_id_makes_no_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("request should not be made")

    assert await _client(handler).compute_hierarchy_depth("P31") is None
