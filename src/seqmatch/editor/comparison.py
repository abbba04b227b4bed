"""Stateful editing session for the matches of one text pair."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Tuple

from seqmatch.analysis.models import AnalysisSnapshot, Match
from seqmatch.errors import ErrorKind, MatchError, Outcome, SnapshotIntegrityError
from seqmatch.runtime import telemetry
from seqmatch.tokenization import Tokens

ERROR_INVALID_MATCH_INDEX = "Invalid match index."
ERROR_LENGTH_NOT_POSITIVE = "Length must be positive."
ERROR_LENGTH_ZERO = "Length must not be zero."
ERROR_MATCH_OUT_OF_BOUNDS = "Match would exceed text boundaries."
ERROR_TRUNCATE_TOO_LONG = "Match cannot be truncated completely."
ERROR_TOKENS_MISMATCH = "Tokens do not match in the selected range."
ERROR_CONTEXT_NEGATIVE = "Context size must be non-negative."


class SnapshotOwner(Protocol):
    """Holder of the current snapshot that accepts per-pair replacements."""

    def replace_matches_for_pair(
        self, first_id: str, second_id: str, replacements: List[Match]
    ) -> Outcome[AnalysisSnapshot]:
        ...


@dataclass(frozen=True, slots=True)
class MatchView:
    first_index: int
    second_index: int
    length: int


@dataclass(frozen=True, slots=True)
class MatchContext:
    """Tokens around a match; ``*_match_start`` index into the context lists."""

    first_tokens: Tokens
    first_match_start: int
    second_tokens: Tokens
    second_match_start: int
    length: int


@dataclass(slots=True)
class EditableMatch:
    first_index: int
    second_index: int
    length: int

    def copy(self) -> "EditableMatch":
        return EditableMatch(self.first_index, self.second_index, self.length)

    def view(self) -> MatchView:
        return MatchView(self.first_index, self.second_index, self.length)

    def sort_key(self) -> Tuple[int, int]:
        return (self.first_index, self.second_index)


class ComparisonEditor:
    """Edits one pair's matches and commits every accepted change.

    Indices are expressed in the order the caller named the pair; the
    snapshot stores them in canonical (load) order and the session converts
    in both directions.
    """

    def __init__(
        self,
        owner: SnapshotOwner,
        snapshot: AnalysisSnapshot,
        first_id: str,
        second_id: str,
    ) -> None:
        if first_id not in snapshot.tokenized_texts or second_id not in snapshot.tokenized_texts:
            raise SnapshotIntegrityError(
                f"snapshot does not contain both '{first_id}' and '{second_id}'"
            )
        self._owner = owner
        self.first_id = first_id
        self.second_id = second_id
        self.canonical_first_id, self.canonical_second_id = snapshot.canonical_pair(
            first_id, second_id
        )
        self.orientation_swapped = self.canonical_first_id != first_id
        self.first_tokens: Tokens = snapshot.tokens(first_id)
        self.second_tokens: Tokens = snapshot.tokens(second_id)

        loaded: List[EditableMatch] = []
        for match in snapshot.matches_for_pair(first_id, second_id):
            if match.first_id == first_id:
                loaded.append(
                    EditableMatch(match.first_index, match.second_index, match.length)
                )
            else:
                loaded.append(
                    EditableMatch(match.second_index, match.first_index, match.length)
                )
        self._matches: List[EditableMatch] = sorted(loaded, key=EditableMatch.sort_key)

    # -- queries ---------------------------------------------------------

    def matches(self) -> Tuple[MatchView, ...]:
        return tuple(match.view() for match in self._matches)

    @property
    def match_count(self) -> int:
        return len(self._matches)

    @property
    def total_match_length(self) -> int:
        return sum(match.length for match in self._matches)

    @property
    def first_token_count(self) -> int:
        return len(self.first_tokens)

    @property
    def second_token_count(self) -> int:
        return len(self.second_tokens)

    def context_for_match(self, match_number: int, context_size: int) -> Outcome[MatchContext]:
        if context_size < 0:
            return Outcome.failure(ErrorKind.INVALID_ARGUMENT, ERROR_CONTEXT_NEGATIVE)
        error = self._check_match_number(match_number)
        if error:
            return Outcome.from_error(error)
        match = self._matches[match_number - 1]
        first_window, first_start = _window(
            self.first_tokens, match.first_index, match.length, context_size
        )
        second_window, second_start = _window(
            self.second_tokens, match.second_index, match.length, context_size
        )
        return Outcome.success(
            MatchContext(
                first_tokens=first_window,
                first_match_start=first_start,
                second_tokens=second_window,
                second_match_start=second_start,
                length=match.length,
            )
        )

    # -- edits -----------------------------------------------------------

    def add_match(self, first_index: int, second_index: int, length: int) -> Outcome[MatchView]:
        if length < 1:
            return Outcome.failure(ErrorKind.INVALID_ARGUMENT, ERROR_LENGTH_NOT_POSITIVE)
        error = self._check_ranges(first_index, second_index, length) or self._check_tokens(
            first_index, second_index, length
        )
        if error:
            return Outcome.from_error(error)
        added = EditableMatch(first_index, second_index, length)
        candidate = [match.copy() for match in self._matches] + [added]
        return self._commit("add", candidate, added)

    def extend_match(self, match_number: int, delta: int) -> Outcome[MatchView]:
        if delta == 0:
            return Outcome.failure(ErrorKind.INVALID_ARGUMENT, ERROR_LENGTH_ZERO)
        error = self._check_match_number(match_number)
        if error:
            return Outcome.from_error(error)
        candidate = [match.copy() for match in self._matches]
        target = candidate[match_number - 1]

        if delta > 0:
            first_end = target.first_index + target.length
            second_end = target.second_index + target.length
            error = self._check_ranges(first_end, second_end, delta) or self._check_tokens(
                first_end, second_end, delta
            )
            if error:
                return Outcome.from_error(error)
            target.length += delta
        else:
            extension = -delta
            if target.first_index < extension or target.second_index < extension:
                return Outcome.failure(ErrorKind.OUT_OF_BOUNDS, ERROR_MATCH_OUT_OF_BOUNDS)
            error = self._check_tokens(
                target.first_index - extension, target.second_index - extension, extension
            )
            if error:
                return Outcome.from_error(error)
            target.first_index -= extension
            target.second_index -= extension
            target.length += extension
        return self._commit("extend", candidate, target)

    def truncate_match(self, match_number: int, delta: int) -> Outcome[MatchView]:
        if delta == 0:
            return Outcome.failure(ErrorKind.INVALID_ARGUMENT, ERROR_LENGTH_ZERO)
        error = self._check_match_number(match_number)
        if error:
            return Outcome.from_error(error)
        candidate = [match.copy() for match in self._matches]
        target = candidate[match_number - 1]
        reduction = abs(delta)
        if reduction >= target.length:
            return Outcome.failure(
                ErrorKind.INVALID_ARGUMENT,
                ERROR_TRUNCATE_TOO_LONG,
                reason="truncate_too_long",
            )
        if delta > 0:
            target.first_index += reduction
            target.second_index += reduction
        target.length -= reduction
        return self._commit("truncate", candidate, target)

    def discard_match(self, match_number: int) -> Outcome[MatchView]:
        error = self._check_match_number(match_number)
        if error:
            return Outcome.from_error(error)
        candidate = [match.copy() for match in self._matches]
        removed = candidate.pop(match_number - 1)
        return self._commit("discard", candidate, removed)

    # -- validation ------------------------------------------------------

    def _check_match_number(self, match_number: int) -> Optional[MatchError]:
        if match_number < 1 or match_number > len(self._matches):
            return MatchError(ErrorKind.INVALID_INDEX, ERROR_INVALID_MATCH_INDEX)
        return None

    def _check_ranges(self, first_index: int, second_index: int, length: int) -> Optional[MatchError]:
        if not _within(first_index, length, len(self.first_tokens)) or not _within(
            second_index, length, len(self.second_tokens)
        ):
            return MatchError(ErrorKind.OUT_OF_BOUNDS, ERROR_MATCH_OUT_OF_BOUNDS)
        return None

    def _check_tokens(self, first_index: int, second_index: int, length: int) -> Optional[MatchError]:
        for offset in range(length):
            if self.first_tokens[first_index + offset] != self.second_tokens[second_index + offset]:
                return MatchError(ErrorKind.TOKEN_MISMATCH, ERROR_TOKENS_MISMATCH)
        return None

    # -- commit ----------------------------------------------------------

    def _commit(
        self, label: str, candidate: List[EditableMatch], changed: EditableMatch
    ) -> Outcome[MatchView]:
        candidate.sort(key=EditableMatch.sort_key)
        replacements = list(self._to_canonical(candidate))
        with telemetry.span(
            f"editor::{label}",
            component="editor",
            metadata={"pair": f"{self.first_id}-{self.second_id}"},
        ):
            committed = self._owner.replace_matches_for_pair(
                self.canonical_first_id, self.canonical_second_id, replacements
            )
        if not committed.ok:
            return Outcome.from_error(committed.error)  # type: ignore[arg-type]
        self._matches = candidate
        telemetry.record_event(
            "editor.commit",
            data={"action": label, "pair": f"{self.first_id}-{self.second_id}", "matches": len(candidate)},
            logger_name="seqmatch.editor",
        )
        return Outcome.success(changed.view())

    def _to_canonical(self, matches: Iterable[EditableMatch]) -> Iterable[Match]:
        for match in matches:
            if self.orientation_swapped:
                first_index, second_index = match.second_index, match.first_index
            else:
                first_index, second_index = match.first_index, match.second_index
            yield Match(
                self.canonical_first_id,
                first_index,
                self.canonical_second_id,
                second_index,
                match.length,
            )


def _within(index: int, length: int, token_count: int) -> bool:
    return index >= 0 and length >= 0 and index + length <= token_count


def _window(tokens: Tokens, start: int, length: int, context_size: int) -> Tuple[Tokens, int]:
    window_start = max(0, start - context_size)
    window_end = min(len(tokens), start + length + context_size)
    return tokens[window_start:window_end], start - window_start


__all__ = [
    "ComparisonEditor",
    "EditableMatch",
    "MatchContext",
    "MatchView",
    "SnapshotOwner",
]
