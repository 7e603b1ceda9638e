# src/wordbook/core/normalize.py
"""
Word normalization and shard routing.

"  Hello " → "hello" → shard "h"
"42nd"     → "42nd"  → shard "misc"
"""

import string

from wordbook.core.errors import InvalidQuery


CATCH_ALL_KEY = "misc"
LETTER_KEYS = tuple(string.ascii_lowercase)
SHARD_KEYS = LETTER_KEYS + (CATCH_ALL_KEY,)


def normalize(word: str) -> str:
    if not isinstance(word, str):
        raise TypeError(f"word must be str, not {type(word).__name__}")
    return word.strip().lower()


def shard_key_for(normalized: str) -> str:
    """Shard key for an already-normalized word."""
    if not normalized:
        raise InvalidQuery("empty word has no shard")
    first = normalized[0]
    if first in string.ascii_lowercase:
        return first
    return CATCH_ALL_KEY


def route(word: str) -> tuple[str, str]:
    """Normalize a raw word and return (normalized, shard_key)."""
    normalized = normalize(word)
    if not normalized:
        raise InvalidQuery("query is empty")
    return normalized, shard_key_for(normalized)


def is_shard_key(key: str) -> bool:
    return key in SHARD_KEYS
