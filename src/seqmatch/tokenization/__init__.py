"""Tokenizers turning text into token sequences."""

from .strategies import (
    TokenizationStrategy,
    Tokens,
    find_strategy,
    resolve_strategy,
    tokenize_chars,
    tokenize_smart,
    tokenize_words,
)

__all__ = [
    "TokenizationStrategy",
    "Tokens",
    "find_strategy",
    "resolve_strategy",
    "tokenize_chars",
    "tokenize_smart",
    "tokenize_words",
]
