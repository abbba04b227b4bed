"""Text store owning loaded texts and the current analysis snapshot."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from seqmatch.analysis.engine import find_matches
from seqmatch.analysis.models import AnalysisSnapshot, Match
from seqmatch.editor.comparison import ComparisonEditor
from seqmatch.errors import ErrorKind, Outcome
from seqmatch.runtime import telemetry
from seqmatch.tokenization import TokenizationStrategy, Tokens

ERROR_COULD_NOT_READ_FILE = "Could not read file."
ERROR_UNKNOWN_IDENTIFIER = "No text stored for identifier '{}'."
ERROR_INVALID_MIN_MATCH_LENGTH = "Minimum match length must be positive."
ERROR_NO_ANALYSIS = "No analysis result available."
ERROR_SAME_IDENTIFIER = "Cannot compare a text with itself."
MATCH_LINE = "Match of length {length}: {first}-{second}"


@dataclass(frozen=True, slots=True)
class LoadedText:
    identifier: str
    content: str


class SequenceMatcher:
    """Keeps texts in load order and replaces the snapshot wholesale."""

    def __init__(self) -> None:
        self._texts: Dict[str, LoadedText] = {}
        self._snapshot: Optional[AnalysisSnapshot] = None

    @property
    def snapshot(self) -> Optional[AnalysisSnapshot]:
        return self._snapshot

    @property
    def identifiers(self) -> List[str]:
        return list(self._texts)

    def input(self, identifier: str, text: str) -> Outcome[str]:
        return self._store(LoadedText(identifier, text))

    def load(self, path: Union[str, Path]) -> Outcome[str]:
        candidate = Path(path)
        try:
            resolved = candidate.resolve()
            content = resolved.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            telemetry.record_event(
                "store.read_failed",
                level="warning",
                data={"path": str(candidate), "reason": str(exc)},
                logger_name="seqmatch.matcher",
            )
            return Outcome.failure(ErrorKind.READ_FAILED, ERROR_COULD_NOT_READ_FILE)
        return self._store(LoadedText(resolved.name, content))

    def tokenize(self, identifier: str, strategy: TokenizationStrategy) -> Outcome[Tokens]:
        loaded = self._texts.get(identifier)
        if loaded is None:
            return Outcome.failure(
                ErrorKind.UNKNOWN_IDENTIFIER, ERROR_UNKNOWN_IDENTIFIER.format(identifier)
            )
        return Outcome.success(strategy.tokenize(loaded.content))

    def analyze(self, strategy: TokenizationStrategy, min_match_length: int) -> Outcome[AnalysisSnapshot]:
        if min_match_length < 1:
            return Outcome.failure(ErrorKind.INVALID_ARGUMENT, ERROR_INVALID_MIN_MATCH_LENGTH)

        started = time.perf_counter()
        tokenized = {
            identifier: strategy.tokenize(loaded.content)
            for identifier, loaded in self._texts.items()
        }
        matches = find_matches(tokenized, min_match_length)
        self._snapshot = AnalysisSnapshot(
            strategy=strategy,
            min_match_length=min_match_length,
            tokenized_texts=tokenized,
            matches=tuple(matches),
        )
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        telemetry.record_event(
            "analysis.complete",
            data={
                "strategy": strategy.value,
                "texts": len(tokenized),
                "matches": len(matches),
                "elapsed_ms": elapsed_ms,
            },
            logger_name="seqmatch.matcher",
        )
        return Outcome.success(self._snapshot, message=f"Analysis took {elapsed_ms}ms")

    def clear(self) -> Outcome[None]:
        self._texts.clear()
        self._snapshot = None
        return Outcome.success(message="Cleared all texts.")

    def open_editor(self, first_id: str, second_id: str) -> Outcome[ComparisonEditor]:
        snapshot = self._snapshot
        if snapshot is None:
            return Outcome.failure(ErrorKind.NO_ANALYSIS_AVAILABLE, ERROR_NO_ANALYSIS)
        for identifier in (first_id, second_id):
            if identifier not in snapshot.tokenized_texts:
                return Outcome.failure(
                    ErrorKind.UNKNOWN_IDENTIFIER, ERROR_UNKNOWN_IDENTIFIER.format(identifier)
                )
        if first_id == second_id:
            return Outcome.failure(ErrorKind.INVALID_ARGUMENT, ERROR_SAME_IDENTIFIER)
        return Outcome.success(ComparisonEditor(self, snapshot, first_id, second_id))

    def pair_matches(self, first_id: str, second_id: str) -> Outcome[str]:
        opened = self.open_editor(first_id, second_id)
        if not opened.ok:
            return Outcome.from_error(opened.error)  # type: ignore[arg-type]
        editor = opened.unwrap()
        lines = [
            MATCH_LINE.format(length=view.length, first=view.first_index, second=view.second_index)
            for view in editor.matches()
        ]
        return Outcome.success("\n".join(lines), message="\n".join(lines) or None)

    def replace_matches_for_pair(
        self, first_id: str, second_id: str, replacements: List[Match]
    ) -> Outcome[AnalysisSnapshot]:
        # Always re-read the current snapshot so a stale session cannot
        # resurrect an older match set.
        snapshot = self._snapshot
        if snapshot is None:
            return Outcome.failure(ErrorKind.NO_ANALYSIS_AVAILABLE, ERROR_NO_ANALYSIS)
        for identifier in (first_id, second_id):
            if identifier not in snapshot.tokenized_texts:
                return Outcome.failure(
                    ErrorKind.UNKNOWN_IDENTIFIER, ERROR_UNKNOWN_IDENTIFIER.format(identifier)
                )
        self._snapshot = snapshot.with_pair_matches(first_id, second_id, replacements)
        return Outcome.success(self._snapshot)

    def _store(self, loaded: LoadedText) -> Outcome[str]:
        replaced = loaded.identifier in self._texts
        self._texts[loaded.identifier] = loaded
        verb = "Updated" if replaced else "Loaded"
        telemetry.record_event(
            "store.text",
            data={"identifier": loaded.identifier, "replaced": replaced},
            logger_name="seqmatch.matcher",
        )
        return Outcome.success(loaded.identifier, message=f"{verb} {loaded.identifier}")


__all__ = ["LoadedText", "SequenceMatcher"]
