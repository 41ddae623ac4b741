"""
Tests for the most-specific-type filter.
"""

from article_guidance.entities import SearchResult
from article_guidance.services import filter_most_specific


def _result(entity_id: str, type_id: str, depth: int) -> SearchResult:
    return SearchResult(
        entity_id=entity_id,
        label=entity_id,
        description="",
        source_url=f"http://www.wikidata.org/entity/{entity_id}",
        matched_type_id=type_id,
        hierarchy_depth=depth,
    )


def test_keeps_all_members_at_max_depth():
    results = [_result("Q1", "QA", 3), _result("Q1", "QB", 3), _result("Q1", "QC", 1)]

    filtered = filter_most_specific(results)

    assert [r.matched_type_id for r in filtered] == ["QA", "QB"]


def test_group_without_depth_keeps_everything():
    results = [_result("Q1", "QA", 0), _result("Q1", "QB", 0)]

    assert filter_most_specific(results) == results


def test_max_depth_is_per_entity_not_global():
    results = [
        _result("Q1", "QA", 5),
        _result("Q2", "QB", 2),
        _result("Q1", "QC", 2),
        _result("Q2", "QD", 1),
    ]

    filtered = filter_most_specific(results)

    assert [(r.entity_id, r.matched_type_id) for r in filtered] == [("Q1", "QA"), ("Q2", "QB")]


def test_zero_depth_member_dropped_when_group_has_depth():
    results = [_result("Q1", "QA", 0), _result("Q1", "QB", 4)]

    assert [r.matched_type_id for r in filter_most_specific(results)] == ["QB"]


def test_output_grouped_by_first_encounter():
    results = [
        _result("Q2", "QA", 1),
        _result("Q1", "QB", 1),
        _result("Q2", "QC", 1),
    ]

    filtered = filter_most_specific(results)

    assert [(r.entity_id, r.matched_type_id) for r in filtered] == [
        ("Q2", "QA"),
        ("Q2", "QC"),
        ("Q1", "QB"),
    ]


def test_idempotent():
    results = [
        _result("Q1", "QA", 3),
        _result("Q1", "QB", 3),
        _result("Q1", "QC", 1),
        _result("Q2", "QA", 0),
        _result("Q2", "QD", 0),
        _result("Q3", "QE", 7),
    ]

    once = filter_most_specific(results)

    assert filter_most_specific(once) == once


def test_empty_input():
    assert filter_most_specific([]) == []
