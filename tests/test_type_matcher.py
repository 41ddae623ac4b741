"""
Tests for TypeMatcher.
"""

import pytest

from article_guidance.services import TypeMatcher


@pytest.mark.asyncio
async def test_delegates_one_batched_call(mock_graph):
    mock_graph.match_types.return_value = {"Q146": ["Q729"]}
    matcher = TypeMatcher(mock_graph)

    matches = await matcher.find_matches(["Q146", "Q147"], ["Q729", "Q5"])

    assert matches == {"Q146": ["Q729"]}
    mock_graph.match_types.assert_awaited_once_with(["Q146", "Q147"], ["Q729", "Q5"])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "candidates,types",
    [
        ([], ["Q729"]),
        (["Q146"], []),
        ([], []),
    ],
)
async def test_empty_input_performs_no_io(mock_graph, candidates, types):
    matcher = TypeMatcher(mock_graph)

    assert await matcher.find_matches(candidates, types) == {}
    assert mock_graph.match_types.await_count == 0


@pytest.mark.asyncio
async def test_repeated_ids_are_deduplicated(mock_graph):
    matcher = TypeMatcher(mock_graph)

    await matcher.find_matches(["Q146", "Q146", "Q5"], ["Q729", "Q729", "Q5", "Q729"])

    mock_graph.match_types.assert_awaited_once_with(["Q146", "Q5"], ["Q729", "Q5"])


@pytest.mark.asyncio
async def test_output_restricted_to_input_ids(mock_graph):
    mock_graph.match_types.return_value = {
        "Q146": ["Q729", "Q999", "Q729"],
        "Q42": ["Q5"],
        "Q147": ["Q999"],
    }
    matcher = TypeMatcher(mock_graph)

    matches = await matcher.find_matches(["Q146", "Q147"], ["Q729", "Q5"])

    assert matches == {"Q146": ["Q729"]}
    for candidate, types in matches.items():
        assert candidate in {"Q146", "Q147"}
        assert set(types) <= {"Q729", "Q5"}


@pytest.mark.asyncio
async def test_candidate_may_match_several_types(mock_graph):
    mock_graph.match_types.return_value = {"Q146": ["Q729", "Q57814795"]}
    matcher = TypeMatcher(mock_graph)

    matches = await matcher.find_matches(["Q146"], ["Q729", "Q57814795"])

    assert matches["Q146"] == ["Q729", "Q57814795"]
