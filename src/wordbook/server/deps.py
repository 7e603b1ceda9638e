"""
Shared dependencies for routes.
"""

import redis
from fastapi import Request

from wordbook.core.config import Settings
from wordbook.core.dictionary import DictionaryService
from wordbook.core.lookup_cache import LookupCache
from wordbook.core.shard_index import ShardIndex
from wordbook.core.shard_store import DirectoryShardStore, HttpShardStore, ShardStore
from wordbook.core.vocabulary import VocabularyStore


def get_redis(url: str) -> redis.Redis:
    return redis.Redis.from_url(url)


def build_shard_store(settings: Settings) -> ShardStore:
    if settings.corpus_url:
        return HttpShardStore(settings.corpus_url)
    return DirectoryShardStore(settings.corpus_dir)


def build_dictionary(settings: Settings, store: ShardStore | None = None) -> DictionaryService:
    index = ShardIndex(store or build_shard_store(settings))
    return DictionaryService(index, LookupCache(settings.cache_size))


def build_vocabulary(settings: Settings, client: redis.Redis | None = None) -> VocabularyStore:
    return VocabularyStore(client or get_redis(settings.redis_url), prefix=settings.prefix)


# === Request-scoped accessors ===

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_dictionary(request: Request) -> DictionaryService:
    return request.app.state.dictionary


def get_vocabulary(request: Request) -> VocabularyStore:
    return request.app.state.vocabulary
