"""Sequence matcher: pairwise token-run detection with an interactive match editor."""

__all__ = [
    "analysis",
    "cli",
    "config",
    "editor",
    "errors",
    "matcher",
    "modes",
    "runtime",
    "tokenization",
]

__version__ = "0.1.0"
