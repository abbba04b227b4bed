import pytest

from seqmatch.analysis import (
    AnalysisSnapshot,
    ListMetric,
    SortOrder,
    collect_summaries,
    find_matches,
    format_histogram,
    format_pair_list,
)
from seqmatch.analysis.statistics import MESSAGE_NO_PAIRS
from seqmatch.editor import ComparisonMetric, format_percentage
from seqmatch.tokenization import TokenizationStrategy


def make_snapshot(**texts: str) -> AnalysisSnapshot:
    tokenized = {key: TokenizationStrategy.WORD.tokenize(value) for key, value in texts.items()}
    return AnalysisSnapshot(
        strategy=TokenizationStrategy.WORD,
        min_match_length=1,
        tokenized_texts=tokenized,
        matches=tuple(find_matches(tokenized, 1)),
    )


def make_three_texts() -> AnalysisSnapshot:
    return make_snapshot(A="a b c d", B="a b x d", C="z")


@pytest.mark.parametrize(
    ("metric", "expected"),
    [
        (ComparisonMetric.SYMMETRIC, "72.73%"),
        (ComparisonMetric.FIRST, "80.00%"),
        (ComparisonMetric.SECOND, "66.67%"),
        (ComparisonMetric.MAXIMUM, "80.00%"),
        (ComparisonMetric.MINIMUM, "66.67%"),
    ],
)
def test_comparison_metrics(metric: ComparisonMetric, expected: str) -> None:
    assert format_percentage(metric.compute(4, 5, 6)) == expected


def test_metrics_of_empty_texts_are_zero() -> None:
    for metric in ComparisonMetric:
        assert metric.compute(0, 0, 0) == 0.0


def test_percentage_rounds_half_up() -> None:
    assert format_percentage(0.125) == "12.50%"
    assert format_percentage(0.00005) == "0.01%"
    assert format_percentage(1.0) == "100.00%"


def test_metric_aliases() -> None:
    assert ComparisonMetric.from_name("  Left ") is ComparisonMetric.FIRST
    assert ComparisonMetric.from_name("avg") is ComparisonMetric.SYMMETRIC
    assert ComparisonMetric.from_name("right") is ComparisonMetric.SECOND
    assert ComparisonMetric.from_name("bogus") is None


def test_collect_summaries_covers_every_pair() -> None:
    summaries = collect_summaries(make_three_texts())

    assert [(s.first_id, s.second_id) for s in summaries] == [("A", "B"), ("A", "C"), ("B", "C")]
    assert summaries[0].total_match_length == 3
    assert summaries[0].longest_match_length == 2
    assert summaries[1].total_match_length == 0


def test_pair_list_descending_then_identifiers() -> None:
    listing = format_pair_list(make_three_texts(), ListMetric.AVG)

    assert listing.splitlines() == ["A-B: 75.00%", "A-C: 0.00%", "B-C: 0.00%"]


def test_pair_list_ascending() -> None:
    listing = format_pair_list(make_three_texts(), ListMetric.AVG, SortOrder.ASCENDING)

    assert listing.splitlines() == ["A-C: 0.00%", "B-C: 0.00%", "A-B: 75.00%"]


def test_pair_list_integer_metrics_and_limit() -> None:
    snapshot = make_three_texts()

    assert format_pair_list(snapshot, ListMetric.LEN, limit=1) == "A-B: 3"
    assert format_pair_list(snapshot, ListMetric.LONG, limit=1) == "A-B: 2"
    assert format_pair_list(snapshot, ListMetric.MAX, limit=1) == "A-B: 75.00%"


def test_pair_list_without_pairs() -> None:
    assert format_pair_list(make_snapshot(A="a"), ListMetric.AVG) == MESSAGE_NO_PAIRS


def test_histogram_counts_buckets_top_down() -> None:
    lines = format_histogram(make_three_texts(), ListMetric.AVG).splitlines()

    assert len(lines) == 10
    assert lines[2] == ":| 1"
    assert lines[9] == ":|| 2"
    assert lines[0] == ": 0"


def test_histogram_requires_percentage_metric() -> None:
    with pytest.raises(ValueError):
        format_histogram(make_three_texts(), ListMetric.LEN)


def test_list_metric_and_order_names() -> None:
    assert ListMetric.from_name("AVG") is ListMetric.AVG
    assert ListMetric.from_name("median") is None
    assert SortOrder.from_name("Ascending") is SortOrder.ASCENDING
    assert SortOrder.from_name("up") is None
