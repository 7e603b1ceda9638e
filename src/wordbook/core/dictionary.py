# src/wordbook/core/dictionary.py
"""
Dictionary lookups over the sharded corpus.

query → normalize → LookupCache → (miss) ShardIndex → LookupCache → result
"""

import logging

from wordbook.core.entry import LookupResult
from wordbook.core.errors import CorpusParseError, ShardUnavailable
from wordbook.core.lookup_cache import LookupCache
from wordbook.core.normalize import SHARD_KEYS, route
from wordbook.core.shard_index import ShardIndex


logger = logging.getLogger(__name__)


class DictionaryService:
    def __init__(self, index: ShardIndex, cache: LookupCache):
        self.index = index
        self.cache = cache

    def lookup(self, raw_query: str) -> LookupResult:
        """
        Look up one word.

        Never raises for corpus problems: an unreadable or malformed shard
        yields an UNAVAILABLE result. Raises InvalidQuery for blank input.
        """
        word, shard_key = route(raw_query)

        cached = self.cache.get(word)
        if cached is not None:
            return cached

        try:
            entries = self.index.resolve(shard_key)
        except CorpusParseError as e:
            result = LookupResult.unavailable(word, shard_key, e.diagnostic)
            self.cache.put(word, result)
            return result
        except ShardUnavailable as e:
            # I/O failures are retryable, so they stay out of the cache
            logger.warning("%s", e)
            return LookupResult.unavailable(word, shard_key, e.reason)

        entry = entries.get(word)
        if entry is None:
            result = LookupResult.not_found(word, shard_key)
        else:
            result = LookupResult.hit(word, shard_key, entry)
        self.cache.put(word, result)
        return result

    def prefetch(self, shard_keys: list[str] | None = None) -> dict[str, str]:
        """Load shards ahead of use. Returns {shard_key: "ok" | error message}."""
        outcome = {}
        for key in SHARD_KEYS if shard_keys is None else shard_keys:
            try:
                self.index.resolve(key)
                outcome[key] = "ok"
            except (CorpusParseError, ShardUnavailable, ValueError) as e:
                outcome[key] = str(e)
        return outcome

    def invalidate(self, shard_key: str | None = None) -> int:
        """Drop a shard (or all) and its cached lookups. Returns evicted cache entries."""
        self.index.invalidate(shard_key)
        if shard_key is None:
            dropped = len(self.cache)
            self.cache.clear()
            return dropped
        return self.cache.discard_where(lambda r: r.shard_key == shard_key)

    def stats(self) -> dict:
        return {
            "cache": self.cache.stats().to_dict(),
            "resident_shards": self.index.resident_keys(),
            "resident_words": self.index.word_count(),
        }
