"""Matching engine, snapshot model, and pairwise statistics."""

from .engine import find_matches, run_length
from .models import AnalysisSnapshot, Match
from .statistics import (
    ListMetric,
    PairSummary,
    SortOrder,
    collect_summaries,
    format_histogram,
    format_pair_list,
)

__all__ = [
    "AnalysisSnapshot",
    "ListMetric",
    "Match",
    "PairSummary",
    "SortOrder",
    "collect_summaries",
    "find_matches",
    "format_histogram",
    "format_pair_list",
    "run_length",
]
