"""Immutable match and analysis snapshot types."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence, Tuple

from seqmatch.errors import SnapshotIntegrityError
from seqmatch.tokenization import TokenizationStrategy, Tokens


@dataclass(frozen=True, slots=True)
class Match:
    """``length`` equal tokens starting at ``first_index`` / ``second_index``."""

    first_id: str
    first_index: int
    second_id: str
    second_index: int
    length: int

    def __post_init__(self) -> None:
        if self.first_id is None or self.second_id is None:
            raise SnapshotIntegrityError("match identifiers must not be None")
        if self.first_index < 0:
            raise SnapshotIntegrityError("first_index must be non-negative")
        if self.second_index < 0:
            raise SnapshotIntegrityError("second_index must be non-negative")
        if self.length < 1:
            raise SnapshotIntegrityError("length must be positive")

    @property
    def first_end(self) -> int:
        return self.first_index + self.length

    @property
    def second_end(self) -> int:
        return self.second_index + self.length

    def involves(self, first_id: str, second_id: str) -> bool:
        return (self.first_id == first_id and self.second_id == second_id) or (
            self.first_id == second_id and self.second_id == first_id
        )


@dataclass(frozen=True, slots=True)
class AnalysisSnapshot:
    """Result bundle of one engine run. Edits produce a new snapshot value."""

    strategy: TokenizationStrategy
    min_match_length: int
    tokenized_texts: Mapping[str, Tokens] = field(default_factory=dict)
    matches: Tuple[Match, ...] = ()

    def __post_init__(self) -> None:
        if self.min_match_length < 1:
            raise SnapshotIntegrityError("min_match_length must be positive")
        frozen = {key: tuple(tokens) for key, tokens in self.tokenized_texts.items()}
        object.__setattr__(self, "tokenized_texts", MappingProxyType(frozen))
        object.__setattr__(self, "matches", tuple(self.matches))

    @property
    def identifiers(self) -> Tuple[str, ...]:
        return tuple(self.tokenized_texts.keys())

    def tokens(self, identifier: str) -> Tokens:
        return self.tokenized_texts[identifier]

    def pairs(self) -> List[Tuple[str, str]]:
        """Every unordered pair in first-seen order, outer text first."""

        ids = self.identifiers
        return [
            (ids[outer], ids[inner])
            for outer in range(len(ids))
            for inner in range(outer + 1, len(ids))
        ]

    def canonical_pair(self, first_id: str, second_id: str) -> Tuple[str, str]:
        ids = self.identifiers
        if ids.index(first_id) <= ids.index(second_id):
            return first_id, second_id
        return second_id, first_id

    def matches_for_pair(self, first_id: str, second_id: str) -> List[Match]:
        return [match for match in self.matches if match.involves(first_id, second_id)]

    def with_pair_matches(
        self, first_id: str, second_id: str, replacements: Iterable[Match]
    ) -> "AnalysisSnapshot":
        """Return a snapshot whose matches for the pair are ``replacements``.

        Other pairs keep their relative order. The new block is sorted by
        ``(first_index, second_index)`` and placed where the pair's old block
        started, or where its pair would sit in enumeration order.
        """

        canonical = self.canonical_pair(first_id, second_id)
        block = sorted(replacements, key=lambda m: (m.first_index, m.second_index))
        for match in block:
            if (match.first_id, match.second_id) != canonical:
                raise SnapshotIntegrityError(
                    f"replacement {match} is not in canonical orientation {canonical}"
                )
            _ensure_within(self, match)

        kept: List[Match] = []
        insert_at: int | None = None
        for match in self.matches:
            if match.involves(*canonical):
                if insert_at is None:
                    insert_at = len(kept)
                continue
            kept.append(match)

        if insert_at is None:
            insert_at = _enumeration_slot(self, kept, canonical)

        merged = kept[:insert_at] + block + kept[insert_at:]
        return AnalysisSnapshot(
            strategy=self.strategy,
            min_match_length=self.min_match_length,
            tokenized_texts=self.tokenized_texts,
            matches=tuple(merged),
        )


def _pair_rank(snapshot: AnalysisSnapshot, pair: Tuple[str, str]) -> int:
    ids = snapshot.identifiers
    outer, inner = sorted((ids.index(pair[0]), ids.index(pair[1])))
    # Position of (outer, inner) in the nested outer/inner enumeration.
    count = len(ids)
    return outer * count - outer * (outer + 1) // 2 + (inner - outer - 1)


def _enumeration_slot(
    snapshot: AnalysisSnapshot, kept: Sequence[Match], pair: Tuple[str, str]
) -> int:
    rank = _pair_rank(snapshot, pair)
    for index, match in enumerate(kept):
        if _pair_rank(snapshot, (match.first_id, match.second_id)) > rank:
            return index
    return len(kept)


def _ensure_within(snapshot: AnalysisSnapshot, match: Match) -> None:
    first = snapshot.tokens(match.first_id)
    second = snapshot.tokens(match.second_id)
    if match.first_end > len(first) or match.second_end > len(second):
        raise SnapshotIntegrityError(f"{match} exceeds its texts")
    if first[match.first_index : match.first_end] != second[
        match.second_index : match.second_end
    ]:
        raise SnapshotIntegrityError(f"{match} covers unequal tokens")


__all__ = ["Match", "AnalysisSnapshot"]
