# src/wordbook/core/shard_store.py
"""
Byte-level access to corpus shards.

Each shard is one document named after its key: a.json ... z.json, misc.json.
Stores read bytes only. Parsing and caching belong to ShardIndex.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import httpx

from wordbook.core.errors import ShardUnavailable
from wordbook.core.normalize import SHARD_KEYS, is_shard_key


logger = logging.getLogger(__name__)


class ShardStore(ABC):
    """Base class for shard sources."""

    suffix: str = ".json"

    @abstractmethod
    def open(self, shard_key: str) -> bytes:
        """Return the raw content of a shard, or raise ShardUnavailable."""
        pass

    def available_keys(self) -> list[str]:
        return list(SHARD_KEYS)

    def filename(self, shard_key: str) -> str:
        if not is_shard_key(shard_key):
            raise ShardUnavailable(shard_key, "unknown shard key")
        return f"{shard_key}{self.suffix}"


class DirectoryShardStore(ShardStore):
    """Shards bundled as files in one directory."""

    def __init__(self, root: Path | str, suffix: str = ".json"):
        self.root = Path(root)
        self.suffix = suffix

    def path_for(self, shard_key: str) -> Path:
        return self.root / self.filename(shard_key)

    def open(self, shard_key: str) -> bytes:
        path = self.path_for(shard_key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise ShardUnavailable(shard_key, f"missing file {path}")
        except OSError as e:
            raise ShardUnavailable(shard_key, f"cannot read {path}: {e}")

    def available_keys(self) -> list[str]:
        return [k for k in SHARD_KEYS if (self.root / f"{k}{self.suffix}").is_file()]

    def __repr__(self) -> str:
        return f"DirectoryShardStore({str(self.root)!r})"


class HttpShardStore(ShardStore):
    """Shards hosted remotely under one base URL."""

    def __init__(
        self,
        base_url: str,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
        suffix: str = ".json",
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)
        self.suffix = suffix

    def url_for(self, shard_key: str) -> str:
        return f"{self.base_url}/{self.filename(shard_key)}"

    def open(self, shard_key: str) -> bytes:
        url = self.url_for(shard_key)
        try:
            r = self.client.get(url)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ShardUnavailable(shard_key, f"GET {url} returned {e.response.status_code}")
        except httpx.HTTPError as e:
            raise ShardUnavailable(shard_key, f"GET {url} failed: {e}")
        logger.debug("fetched shard %s (%d bytes)", shard_key, len(r.content))
        return r.content

    def close(self) -> None:
        self.client.close()

    def __repr__(self) -> str:
        return f"HttpShardStore({self.base_url!r})"
