"""Comparison editing session and its similarity metrics."""

from .comparison import (
    ComparisonEditor,
    EditableMatch,
    MatchContext,
    MatchView,
    SnapshotOwner,
)
from .metrics import ComparisonMetric, format_percentage, ratio

__all__ = [
    "ComparisonEditor",
    "ComparisonMetric",
    "EditableMatch",
    "MatchContext",
    "MatchView",
    "SnapshotOwner",
    "format_percentage",
    "ratio",
]
