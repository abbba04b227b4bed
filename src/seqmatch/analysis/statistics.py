"""Pairwise summaries folded over a snapshot (list/top/histogram)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from seqmatch.editor.metrics import format_percentage, ratio

from .models import AnalysisSnapshot

MESSAGE_NO_PAIRS = "No program pairs available."
HISTOGRAM_BUCKETS = 10
BUCKET_WIDTH_PERCENT = 10


@dataclass(slots=True)
class PairSummary:
    first_id: str
    second_id: str
    first_token_count: int
    second_token_count: int
    total_match_length: int = 0
    longest_match_length: int = 0

    def add_match(self, length: int) -> None:
        self.total_match_length += length
        self.longest_match_length = max(self.longest_match_length, length)

    def symmetric_similarity(self) -> float:
        combined = self.first_token_count + self.second_token_count
        if combined == 0 or self.total_match_length == 0:
            return 0.0
        return (2.0 * self.total_match_length) / combined

    def maximum_similarity(self) -> float:
        return max(self._to_first(), self._to_second())

    def minimum_similarity(self) -> float:
        return min(self._to_first(), self._to_second())

    def _to_first(self) -> float:
        return ratio(self.total_match_length, self.first_token_count)

    def _to_second(self) -> float:
        return ratio(self.total_match_length, self.second_token_count)


class ListMetric(str, Enum):
    AVG = "avg"
    MAX = "max"
    MIN = "min"
    LONG = "long"
    LEN = "len"

    @property
    def is_percentage(self) -> bool:
        return self in (ListMetric.AVG, ListMetric.MAX, ListMetric.MIN)

    def extract(self, summary: PairSummary) -> float:
        return _EXTRACTORS[self](summary)

    def format(self, value: float) -> str:
        if self.is_percentage:
            return format_percentage(value)
        return str(round(value))

    @classmethod
    def from_name(cls, name: str) -> Optional["ListMetric"]:
        normalized = name.strip().lower()
        for metric in cls:
            if metric.value == normalized:
                return metric
        return None


_EXTRACTORS: Dict[ListMetric, Callable[[PairSummary], float]] = {
    ListMetric.AVG: PairSummary.symmetric_similarity,
    ListMetric.MAX: PairSummary.maximum_similarity,
    ListMetric.MIN: PairSummary.minimum_similarity,
    ListMetric.LONG: lambda summary: float(summary.longest_match_length),
    ListMetric.LEN: lambda summary: float(summary.total_match_length),
}


class SortOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def from_name(cls, name: str) -> Optional["SortOrder"]:
        normalized = name.strip().lower()
        if normalized in {"asc", "ascending"}:
            return cls.ASCENDING
        if normalized in {"desc", "descending"}:
            return cls.DESCENDING
        return None


def collect_summaries(snapshot: AnalysisSnapshot) -> List[PairSummary]:
    summaries: Dict[Tuple[str, str], PairSummary] = {}
    for first_id, second_id in snapshot.pairs():
        summaries[(first_id, second_id)] = PairSummary(
            first_id,
            second_id,
            len(snapshot.tokens(first_id)),
            len(snapshot.tokens(second_id)),
        )
    for match in snapshot.matches:
        summary = summaries.get((match.first_id, match.second_id))
        if summary is not None:
            summary.add_match(match.length)
    return list(summaries.values())


def format_pair_list(
    snapshot: AnalysisSnapshot,
    metric: ListMetric,
    order: SortOrder = SortOrder.DESCENDING,
    limit: Optional[int] = None,
) -> str:
    summaries = collect_summaries(snapshot)
    if not summaries:
        return MESSAGE_NO_PAIRS

    # Stable sorts: identifiers ascending first, then the metric on top.
    summaries.sort(key=lambda s: (s.first_id, s.second_id))
    summaries.sort(key=metric.extract, reverse=order is SortOrder.DESCENDING)
    if limit is not None:
        summaries = summaries[:limit]
    return "\n".join(
        f"{s.first_id}-{s.second_id}: {metric.format(metric.extract(s))}"
        for s in summaries
    )


def format_histogram(snapshot: AnalysisSnapshot, metric: ListMetric) -> str:
    if not metric.is_percentage:
        raise ValueError("Metric must be a percentage.")
    buckets = [0] * HISTOGRAM_BUCKETS
    for summary in collect_summaries(snapshot):
        buckets[_bucket(metric.extract(summary) * 100.0)] += 1
    return "\n".join(
        f":{'|' * count} {count}" for count in reversed(buckets)
    )


def _bucket(percent: float) -> int:
    if percent < 0:
        return 0
    return min(int(percent // BUCKET_WIDTH_PERCENT), HISTOGRAM_BUCKETS - 1)


__all__ = [
    "ListMetric",
    "PairSummary",
    "SortOrder",
    "collect_summaries",
    "format_histogram",
    "format_pair_list",
]
