"""Tokenization strategies that split raw text into comparable tokens."""

from __future__ import annotations

import re
import unicodedata
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from seqmatch.errors import ErrorKind, Outcome

Tokens = Tuple[str, ...]
Tokenizer = Callable[[str], Tokens]

_WHITESPACE = re.compile(r"\s+", re.ASCII)
_WORD_CONNECTORS = frozenset("'-")
_CONTROL_WHITESPACE = frozenset("\t\n\x0b\x0c\r\x1c\x1d\x1e\x1f")
_NON_BREAKING_SPACES = frozenset("\u00a0\u2007\u202f")
_SEPARATOR_CATEGORIES = frozenset(("Zs", "Zl", "Zp"))


def tokenize_chars(text: str) -> Tokens:
    # Python strings iterate code points, so surrogate pairs never split.
    return tuple(text)


def tokenize_words(text: str) -> Tokens:
    return tuple(part for part in _WHITESPACE.split(text) if part)


def tokenize_smart(text: str) -> Tokens:
    tokens: List[str] = []
    current: List[str] = []

    def flush() -> None:
        if current:
            tokens.append("".join(current))
            current.clear()

    for index, char in enumerate(text):
        if _is_whitespace(char):
            flush()
        elif _is_letter_or_digit(char) or _is_word_connector(text, index):
            current.append(char)
        else:
            flush()
            tokens.append(char)
    flush()
    return tuple(tokens)


def _is_word_connector(text: str, index: int) -> bool:
    if text[index] not in _WORD_CONNECTORS:
        return False
    if index == 0 or index >= len(text) - 1:
        return False
    return _is_letter_or_digit(text[index - 1]) and _is_letter_or_digit(text[index + 1])


def _is_whitespace(char: str) -> bool:
    """Separators and ASCII control whitespace, excluding non-breaking spaces."""

    if char in _CONTROL_WHITESPACE:
        return True
    if char in _NON_BREAKING_SPACES:
        return False
    return unicodedata.category(char) in _SEPARATOR_CATEGORIES


def _is_letter_or_digit(char: str) -> bool:
    # Letters and decimal digits only; superscripts, fractions and numerals
    # such as "²" or "Ⅻ" stand alone.
    category = unicodedata.category(char)
    return category[0] == "L" or category == "Nd"


class TokenizationStrategy(str, Enum):
    """Named tokenization policy; ``tokenize`` dispatches through a table."""

    CHAR = "char"
    WORD = "word"
    SMART = "smart"

    def tokenize(self, text: str) -> Tokens:
        if text is None:
            raise TypeError("text must not be None")
        return _TOKENIZERS[self](text)


_TOKENIZERS: Dict[TokenizationStrategy, Tokenizer] = {
    TokenizationStrategy.CHAR: tokenize_chars,
    TokenizationStrategy.WORD: tokenize_words,
    TokenizationStrategy.SMART: tokenize_smart,
}


def find_strategy(name: str) -> Optional[TokenizationStrategy]:
    """Look up a strategy by name, ignoring case and surrounding whitespace."""

    normalized = name.strip().lower()
    for strategy in TokenizationStrategy:
        if strategy.value == normalized:
            return strategy
    return None


def resolve_strategy(name: str) -> Outcome[TokenizationStrategy]:
    strategy = find_strategy(name)
    if strategy is None:
        return Outcome.failure(
            ErrorKind.UNKNOWN_STRATEGY, f"Unknown tokenization strategy: {name}"
        )
    return Outcome.success(strategy)


__all__ = [
    "Tokens",
    "TokenizationStrategy",
    "find_strategy",
    "resolve_strategy",
    "tokenize_chars",
    "tokenize_smart",
    "tokenize_words",
]
