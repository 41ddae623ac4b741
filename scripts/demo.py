#!/usr/bin/env python3
"""
Demo script for article guidance.

This script resolves a few items against the live Wikidata endpoints and
runs a search against a small, fixed outline set.
"""

import asyncio
import time

from article_guidance import (
    EntityMetadataFetcher,
    InMemoryCacheRepository,
    OutlineRegistry,
    OutlineType,
    SearchOrchestrator,
    SparqlGraphClient,
    StampedeSafeCache,
    TypeMatcher,
    WikidataApiClient,
)

DEMO_OUTLINES = [
    OutlineType(type_id="Q729", display_title="Outline:Animal", label="animal", hierarchy_depth=2),
    OutlineType(type_id="Q16521", display_title="Outline:Taxon", label="taxon", hierarchy_depth=3),
    OutlineType(type_id="Q5", display_title="Outline:Human", label="human", hierarchy_depth=4),
    OutlineType(type_id="Q515", display_title="Outline:City", label="city", hierarchy_depth=5),
]


class StaticOutlineSource:
    """Outline source serving a fixed list."""

    async def load_outlines(self) -> list[OutlineType]:
        return list(DEMO_OUTLINES)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_entity_metadata(fetcher: EntityMetadataFetcher) -> None:
    """Demonstrate cached entity resolution."""
    print_section("Entity Metadata")

    for entity_id in ["Q146", "Q42", "Q90"]:
        start = time.time()
        metadata = await fetcher.fetch_cached(entity_id, "en")
        elapsed = (time.time() - start) * 1000

        if metadata is None:
            print(f"\n  {entity_id}: no data ({elapsed:.0f}ms)")
            continue
        print(f"\n  {entity_id}: {metadata.label} ({elapsed:.0f}ms)")
        print(f"    Description: {metadata.description}")
        print(f"    Depth: {metadata.hierarchy_depth}")
        print(f"    Image: {metadata.image}")


async def demo_single_flight(fetcher: EntityMetadataFetcher, cache: StampedeSafeCache) -> None:
    """Demonstrate that concurrent misses share one upstream fetch."""
    print_section("Concurrent Misses")

    before = cache.get_stats()["computes"]
    results = await asyncio.gather(*(fetcher.fetch_cached("Q64", "de") for _ in range(10)))
    after = cache.get_stats()["computes"]

    print(f"\n  10 concurrent requests for Q64 (de): {results[0].label if results[0] else None}")
    print(f"  Upstream computes: {after - before}")


async def demo_search(orchestrator: SearchOrchestrator) -> None:
    """Demonstrate search with most-specific outline matching."""
    print_section("Search")

    for query in ["cat", "Douglas Adams", "Berlin"]:
        results = await orchestrator.search(query, "en")
        print(f"\n  Query: '{query}'")
        if not results:
            print("  ✗ No outline matches")
        for result in results:
            print(f"  ✓ {result.entity_id} {result.label} -> {result.matched_type_id} (depth {result.hierarchy_depth})")


async def run() -> None:
    entities = WikidataApiClient.create()
    graph = SparqlGraphClient.create()
    cache = StampedeSafeCache(InMemoryCacheRepository())
    fetcher = EntityMetadataFetcher(entity_repository=entities, graph_client=graph, cache=cache)
    orchestrator = SearchOrchestrator(
        entity_repository=entities,
        outline_registry=OutlineRegistry(StaticOutlineSource(), enabled=True),
        type_matcher=TypeMatcher(graph),
    )

    try:
        await demo_entity_metadata(fetcher)
        await demo_single_flight(fetcher, cache)
        await demo_search(orchestrator)
    finally:
        await entities.close()
        await graph.close()


def main() -> None:
    """Run all demos."""
    print("\n🚀 Article Guidance Demo")
    print("=" * 70)
    print("This demo queries the live Wikidata API and query service")

    try:
        asyncio.run(run())

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure the Wikidata endpoints are reachable,")
        print("or set WIKIDATA_API_URL / SPARQL_ENDPOINT_URL to a mirror.")


if __name__ == "__main__":
    main()
