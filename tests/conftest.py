"""Shared fixtures for the article guidance tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from article_guidance.entities import EntityCandidate, OutlineType
from article_guidance.repositories import InMemoryCacheRepository
from article_guidance.services import StampedeSafeCache


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheRepository:
    return InMemoryCacheRepository(namespace="articleguidance", clock=clock)


@pytest.fixture
def cache(store: InMemoryCacheRepository, clock: FakeClock) -> StampedeSafeCache:
    return StampedeSafeCache(
        store,
        namespace="articleguidance",
        schema_version="v3",
        ttl=86400,
        negative_ttl=300,
        lock_timeout=5,
        clock=clock,
    )


@pytest.fixture
def mock_graph() -> MagicMock:
    """Create a mock graph query client."""
    graph = MagicMock()
    graph.match_types = AsyncMock(return_value={})
    graph.compute_hierarchy_depth = AsyncMock(return_value=None)
    return graph


@pytest.fixture
def mock_entities() -> MagicMock:
    """Create a mock entity repository."""
    entities = MagicMock()
    entities.search_entities = AsyncMock(return_value=[])
    entities.fetch_entity_content = AsyncMock(return_value=None)
    return entities


@pytest.fixture
def mock_outline_source() -> MagicMock:
    """Create a mock outline source."""
    source = MagicMock()
    source.load_outlines = AsyncMock(return_value=[])
    return source


@pytest.fixture
def cat_candidate() -> EntityCandidate:
    return EntityCandidate(
        id="Q146",
        label="house cat",
        description="domesticated feline",
        source_url="http://www.wikidata.org/entity/Q146",
    )


@pytest.fixture
def sample_outlines() -> list[OutlineType]:
    return [
        OutlineType(
            type_id="Q729",
            display_title="Outline:Animal",
            label="animal",
            description="Kingdom of multicellular eukaryotic organisms",
            instructions_html="<p>Describe taxonomy first.</p>",
            thumbnail="https://upload.wikimedia.org/animal.jpg",
            hierarchy_depth=2,
        ),
        OutlineType(
            type_id="Q5",
            display_title="Outline:Human",
            label="human",
            description="Common name of Homo sapiens",
            instructions_html="<p>Start with the person's significance.</p>",
            hierarchy_depth=4,
            notability_risk=True,
        ),
        OutlineType(
            type_id=None,
            display_title="Outline:Draft",
            label="",
        ),
    ]
