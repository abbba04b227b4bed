"""Similarity metrics shown in the editing status line."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional


def ratio(length: int, token_count: int) -> float:
    if token_count == 0 or length == 0:
        return 0.0
    return length / token_count


def format_percentage(value: float) -> str:
    """Render a ratio as a percentage with two decimals, rounding half up."""

    percent = (Decimal(repr(value)) * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{percent}%"


class ComparisonMetric(str, Enum):
    SYMMETRIC = "symmetric"
    FIRST = "first"
    SECOND = "second"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"

    def compute(self, total_length: int, first_count: int, second_count: int) -> float:
        to_first = ratio(total_length, first_count)
        to_second = ratio(total_length, second_count)
        if self is ComparisonMetric.SYMMETRIC:
            combined = first_count + second_count
            return 0.0 if combined == 0 else (2.0 * total_length) / combined
        if self is ComparisonMetric.FIRST:
            return to_first
        if self is ComparisonMetric.SECOND:
            return to_second
        if self is ComparisonMetric.MAXIMUM:
            return max(to_first, to_second)
        return min(to_first, to_second)

    @classmethod
    def from_name(cls, name: str) -> Optional["ComparisonMetric"]:
        return _ALIASES.get(name.strip().lower())


_ALIASES = {
    "symmetric": ComparisonMetric.SYMMETRIC,
    "symmetrical": ComparisonMetric.SYMMETRIC,
    "avg": ComparisonMetric.SYMMETRIC,
    "average": ComparisonMetric.SYMMETRIC,
    "first": ComparisonMetric.FIRST,
    "left": ComparisonMetric.FIRST,
    "second": ComparisonMetric.SECOND,
    "right": ComparisonMetric.SECOND,
    "max": ComparisonMetric.MAXIMUM,
    "maximum": ComparisonMetric.MAXIMUM,
    "min": ComparisonMetric.MINIMUM,
    "minimum": ComparisonMetric.MINIMUM,
}

__all__ = ["ComparisonMetric", "format_percentage", "ratio"]
