import random
from typing import Dict, Sequence

import pytest

from seqmatch.analysis import Match, find_matches, run_length
from seqmatch.tokenization import TokenizationStrategy


def words(text: str) -> tuple:
    return TokenizationStrategy.WORD.tokenize(text)


def as_triples(matches: Sequence[Match]) -> list:
    return [(m.first_index, m.second_index, m.length) for m in matches]


def make_random_texts(seed: int, count: int = 4, size: int = 30) -> Dict[str, tuple]:
    rng = random.Random(seed)
    alphabet = ["a", "b", "c"]
    return {
        f"text{index}": tuple(rng.choice(alphabet) for _ in range(size))
        for index in range(count)
    }


def test_identical_texts_yield_single_match() -> None:
    matches = find_matches({"x": words("a b c"), "y": words("a b c")}, 1)

    assert matches == [Match("x", 0, "y", 0, 3)]


def test_periodic_texts_keep_overlapping_match_starts() -> None:
    matches = find_matches({"x": words("a b a b"), "y": words("a b a b")}, 1)

    assert as_triples(matches) == [(0, 0, 4), (0, 2, 2), (2, 0, 2)]


def test_min_match_length_filters_short_runs() -> None:
    texts = {"x": words("a b c d"), "y": words("x b c y")}

    assert as_triples(find_matches(texts, 2)) == [(1, 1, 2)]
    assert find_matches(texts, 3) == []


def test_pairs_follow_first_seen_order() -> None:
    texts = {"t1": words("a"), "t2": words("a"), "t3": words("a")}

    pairs = [(m.first_id, m.second_id) for m in find_matches(texts, 1)]

    assert pairs == [("t1", "t2"), ("t1", "t3"), ("t2", "t3")]


def test_single_text_has_no_pairs() -> None:
    assert find_matches({"only": words("a b c")}, 1) == []


def test_invalid_min_match_length() -> None:
    with pytest.raises(ValueError):
        find_matches({"x": words("a")}, 0)


def test_run_length_stops_at_text_end() -> None:
    assert run_length(("a", "b"), ("a", "b", "c"), 0, 0) == 2
    assert run_length(("a", "b"), ("b",), 1, 0) == 1
    assert run_length(("a",), ("b",), 0, 0) == 0


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_reported_ranges_are_pointwise_equal(seed: int) -> None:
    texts = make_random_texts(seed)

    for match in find_matches(texts, 1):
        first = texts[match.first_id]
        second = texts[match.second_id]
        assert first[match.first_index : match.first_end] == second[
            match.second_index : match.second_end
        ]


@pytest.mark.parametrize("seed", [3, 11])
def test_every_match_is_a_match_start(seed: int) -> None:
    texts = make_random_texts(seed)

    for match in find_matches(texts, 2):
        if match.first_index > 0 and match.second_index > 0:
            first = texts[match.first_id]
            second = texts[match.second_id]
            assert first[match.first_index - 1] != second[match.second_index - 1]


def test_matches_within_pair_are_ordered() -> None:
    texts = make_random_texts(5, count=2)

    keys = [(m.first_index, m.second_index) for m in find_matches(texts, 1)]

    assert keys == sorted(keys)


def test_engine_is_idempotent() -> None:
    texts = make_random_texts(9)

    assert find_matches(texts, 2) == find_matches(texts, 2)
