"""All-pairs detection of contiguous equal-token runs."""

from __future__ import annotations

from typing import List, Mapping, Sequence

from seqmatch.runtime.telemetry import span

from .models import Match


def find_matches(texts: Mapping[str, Sequence[str]], min_match_length: int) -> List[Match]:
    """Return every match start of length ``>= min_match_length``.

    Pairs are enumerated in the mapping's order (outer text before inner) and
    each pair's matches come out ordered by first then second index. A
    position is a match start when either index is zero or the preceding
    tokens differ; this drops suffixes of a run already reported but keeps
    overlapping runs anchored elsewhere.
    """

    if min_match_length < 1:
        raise ValueError("min_match_length must be positive")

    entries = list(texts.items())
    matches: List[Match] = []
    with span(
        "engine::find_matches",
        component="engine",
        metadata={"texts": len(entries), "min_match_length": min_match_length},
    ) as handle:
        for outer in range(len(entries)):
            for inner in range(outer + 1, len(entries)):
                matches.extend(
                    _match_pair(entries[outer], entries[inner], min_match_length)
                )
        handle.add_metadata("matches", len(matches))
    return matches


def _match_pair(first_entry, second_entry, min_match_length: int) -> List[Match]:
    first_id, first = first_entry
    second_id, second = second_entry
    found: List[Match] = []
    for i in range(len(first)):
        for j in range(len(second)):
            if not _is_match_start(first, second, i, j):
                continue
            length = run_length(first, second, i, j)
            if length >= min_match_length:
                found.append(Match(first_id, i, second_id, j, length))
    return found


def run_length(first: Sequence[str], second: Sequence[str], i: int, j: int) -> int:
    length = 0
    limit = min(len(first) - i, len(second) - j)
    while length < limit and first[i + length] == second[j + length]:
        length += 1
    return length


def _is_match_start(first: Sequence[str], second: Sequence[str], i: int, j: int) -> bool:
    return i == 0 or j == 0 or first[i - 1] != second[j - 1]


__all__ = ["find_matches", "run_length"]
