"""
Shard routes: /api/shards
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from wordbook.core.dictionary import DictionaryService
from wordbook.core.normalize import SHARD_KEYS, is_shard_key
from wordbook.server.deps import get_dictionary


router = APIRouter(prefix="/api/shards", tags=["shards"])


class PrefetchRequest(BaseModel):
    shards: list[str] | None = None


@router.get("")
def list_shards(dictionary: DictionaryService = Depends(get_dictionary)):
    """Residency state of every shard."""
    available = set(dictionary.index.store.available_keys())
    return {
        "shards": [
            {"key": k, "state": dictionary.index.state(k).value, "available": k in available}
            for k in SHARD_KEYS
        ]
    }


@router.post("/prefetch")
def prefetch(req: PrefetchRequest | None = None, dictionary: DictionaryService = Depends(get_dictionary)):
    keys = req.shards if req else None
    unknown = [k for k in keys or [] if not is_shard_key(k)]
    if unknown:
        raise HTTPException(status_code=404, detail=f"Unknown shard(s): {', '.join(unknown)}")
    return {"results": dictionary.prefetch(keys)}


@router.post("/{shard_key}/invalidate")
def invalidate(shard_key: str, dictionary: DictionaryService = Depends(get_dictionary)):
    if not is_shard_key(shard_key):
        raise HTTPException(status_code=404, detail="Shard not found")
    dropped = dictionary.invalidate(shard_key)
    return {"shard": shard_key, "dropped": dropped}
