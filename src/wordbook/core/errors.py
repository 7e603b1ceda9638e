# src/wordbook/core/errors.py
"""
Error taxonomy for the dictionary core.
"""


class WordbookError(Exception):
    pass


class InvalidQuery(WordbookError, ValueError):
    """Empty or whitespace-only query."""


class ShardUnavailable(WordbookError):
    """A shard could not be read. Retrying may succeed."""

    def __init__(self, shard_key: str, reason: str):
        super().__init__(f"shard '{shard_key}' unavailable: {reason}")
        self.shard_key = shard_key
        self.reason = reason


class CorpusParseError(WordbookError):
    """A shard's content is malformed. Fatal for that shard only."""

    def __init__(self, shard_key: str, diagnostic: str):
        super().__init__(f"shard '{shard_key}' is malformed: {diagnostic}")
        self.shard_key = shard_key
        self.diagnostic = diagnostic


class VocabularyStoreCorrupt(WordbookError):
    """Persisted vocabulary could not be read; the store was reset to empty."""


class VocabularyStoreUnavailable(WordbookError):
    """Persistent storage for the vocabulary could not be reached."""
