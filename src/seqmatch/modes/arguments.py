"""Sequential argument parsing for shell commands."""

from __future__ import annotations

import re
from typing import Sequence, Tuple

ERROR_TOO_FEW_ARGUMENTS = "too few arguments"
ERROR_TOO_MANY_ARGUMENTS = "too many arguments provided."

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ArgumentError(ValueError):
    """Raised when a command's arguments are missing or malformed."""

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class Arguments:
    """Cursor over the words following a command keyword."""

    def __init__(self, words: Sequence[str]) -> None:
        self._words: Tuple[str, ...] = tuple(words)
        self._index = 0

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._words)

    def _next(self) -> str:
        if self.exhausted:
            raise ArgumentError(ERROR_TOO_FEW_ARGUMENTS)
        word = self._words[self._index]
        self._index += 1
        return word

    def parse_string(self) -> str:
        return self._next()

    def parse_integer(self) -> int:
        word = self._next()
        if not _INTEGER.fullmatch(word):
            raise ArgumentError(f"'{word}' must be an integer.", argument=word)
        return int(word)

    def parse_positive(self) -> int:
        value = self.parse_integer()
        if value < 1:
            raise ArgumentError(f"'{value}' must be positive.", argument=str(value))
        return value

    def parse_remaining(self) -> str:
        """Consume every remaining word, re-joined with single spaces."""

        rest = self._words[self._index :]
        self._index = len(self._words)
        return " ".join(rest)

    def finish(self) -> None:
        if not self.exhausted:
            raise ArgumentError(ERROR_TOO_MANY_ARGUMENTS)


__all__ = ["ArgumentError", "Arguments", "ERROR_TOO_MANY_ARGUMENTS"]
