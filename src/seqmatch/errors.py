"""Error taxonomy and typed outcomes returned by core operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Recoverable failure categories surfaced to the command layer."""

    INVALID_ARGUMENT = "invalid_argument"
    INVALID_INDEX = "invalid_index"
    OUT_OF_BOUNDS = "out_of_bounds"
    TOKEN_MISMATCH = "token_mismatch"
    UNKNOWN_STRATEGY = "unknown_strategy"
    UNKNOWN_IDENTIFIER = "unknown_identifier"
    NO_ANALYSIS_AVAILABLE = "no_analysis_available"
    READ_FAILED = "read_failed"


@dataclass(frozen=True, slots=True)
class MatchError:
    """A typed failure; ``reason`` narrows the kind when one exists."""

    kind: ErrorKind
    message: str
    reason: Optional[str] = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a success value or a ``MatchError``, never both."""

    value: Optional[T] = None
    error: Optional[MatchError] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls, value: Optional[T] = None, *, message: Optional[str] = None
    ) -> "Outcome[T]":
        return cls(value=value, message=message)

    @classmethod
    def failure(
        cls, kind: ErrorKind, message: str, *, reason: Optional[str] = None
    ) -> "Outcome[T]":
        return cls(error=MatchError(kind=kind, message=message, reason=reason))

    @classmethod
    def from_error(cls, error: MatchError) -> "Outcome[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, raising ``SnapshotIntegrityError`` on failure."""

        if self.error is not None:
            raise SnapshotIntegrityError(self.error.message)
        return self.value  # type: ignore[return-value]


class SnapshotIntegrityError(RuntimeError):
    """Raised when an internal invariant breaks; a defect, not user input."""


__all__ = ["ErrorKind", "MatchError", "Outcome", "SnapshotIntegrityError"]
