"""
Tests for the article guidance API.
"""

import pytest
from fastapi.testclient import TestClient

from article_guidance.api.app import app
from article_guidance.api.dependencies import get_handler
from article_guidance.exceptions import EntitySearchError
from article_guidance.handlers import GuidanceHandler
from article_guidance.services import (
    EntityMetadataFetcher,
    OutlineRegistry,
    SearchOrchestrator,
    TypeMatcher,
)


@pytest.fixture
def registry(mock_outline_source, sample_outlines) -> OutlineRegistry:
    mock_outline_source.load_outlines.return_value = sample_outlines
    return OutlineRegistry(mock_outline_source, enabled=True)


@pytest.fixture
def client(mock_entities, mock_graph, registry, cache, store):
    """Create a test client wired to mocked upstreams."""
    handler = GuidanceHandler(
        orchestrator=SearchOrchestrator(
            entity_repository=mock_entities,
            outline_registry=registry,
            type_matcher=TypeMatcher(mock_graph),
            search_limit=20,
            min_query_length=2,
        ),
        fetcher=EntityMetadataFetcher(
            entity_repository=mock_entities,
            graph_client=mock_graph,
            cache=cache,
            thumbnail_width=200,
        ),
        outline_registry=registry,
        cache_store=store,
    )
    app.dependency_overrides[get_handler] = lambda: handler
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Article Guidance API"
    assert data["endpoints"]["search"] == "/search"


def test_health_before_outlines_load(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "cache_healthy": True, "outlines_loaded": False}


def test_search_returns_most_specific_match(client, mock_entities, mock_graph, cat_candidate):
    mock_entities.search_entities.return_value = [cat_candidate]
    mock_graph.match_types.return_value = {"Q146": ["Q729"]}

    response = client.get("/search", params={"q": "cat", "language": "en"})

    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "cat"
    assert data["language"] == "en"
    assert data["lookup_time_ms"] >= 0
    assert data["results"] == [
        {
            "entity_id": "Q146",
            "label": "house cat",
            "description": "domesticated feline",
            "source_url": "http://www.wikidata.org/entity/Q146",
            "matched_type_id": "Q729",
            "hierarchy_depth": 2,
            "thumbnail": "https://upload.wikimedia.org/animal.jpg",
        }
    ]


def test_search_short_query_is_empty(client, mock_entities):
    response = client.get("/search", params={"q": "c"})

    assert response.status_code == 200
    assert response.json()["results"] == []
    mock_entities.search_entities.assert_not_awaited()


def test_search_requires_query(client):
    response = client.get("/search")
    assert response.status_code == 422


def test_search_upstream_failure_is_bad_gateway(client, mock_entities):
    mock_entities.search_entities.side_effect = EntitySearchError("Failed to search Wikidata: 503")

    response = client.get("/search", params={"q": "cat"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to search Wikidata: 503"


def test_get_entity(client, mock_entities, mock_graph):
    mock_entities.fetch_entity_content.return_value = {
        "label": "human",
        "description": "common name of Homo sapiens",
        "image": "Example File.jpg",
    }
    mock_graph.compute_hierarchy_depth.return_value = 4

    response = client.get("/entities/Q5", params={"language": "en"})

    assert response.status_code == 200
    assert response.json() == {
        "id": "Q5",
        "label": "human",
        "description": "common name of Homo sapiens",
        "image": "https://upload.wikimedia.org/wikipedia/commons/thumb/9/9a/Example_File.jpg/200px-Example_File.jpg",
        "hierarchy_depth": 4,
    }


def test_get_entity_without_data_is_not_found(client, mock_entities):
    mock_entities.fetch_entity_content.return_value = None

    response = client.get("/entities/Q404")
    assert response.status_code == 404


def test_get_entity_rejects_malformed_id(client, mock_entities):
    response = client.get("/entities/P31")

    assert response.status_code == 422
    mock_entities.fetch_entity_content.assert_not_awaited()


def test_invalidate_outlines_forces_reload(client, mock_entities, mock_graph, mock_outline_source, cat_candidate):
    mock_entities.search_entities.return_value = [cat_candidate]
    mock_graph.match_types.return_value = {"Q146": ["Q729"]}

    client.get("/search", params={"q": "cat"})
    assert client.get("/health").json()["outlines_loaded"] is True

    response = client.post("/outlines/invalidate")
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert client.get("/health").json()["outlines_loaded"] is False

    client.get("/search", params={"q": "cat"})
    assert mock_outline_source.load_outlines.await_count == 2
