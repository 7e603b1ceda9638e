# src/wordbook/core/corpus.py
"""
Corpus tooling: split a flat dictionary into shards, and check shards.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from wordbook.core.errors import CorpusParseError, ShardUnavailable
from wordbook.core.normalize import SHARD_KEYS, normalize, shard_key_for
from wordbook.core.shard_index import ShardIndex
from wordbook.core.shard_store import ShardStore


logger = logging.getLogger(__name__)


def load_flat_dictionary(path: Path) -> dict[str, Any]:
    """
    Load a single-file dictionary. Supports either:
      - dict: { "hello": { ... }, ... }
      - list: [ { "word": "hello", ... }, ... ]
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, list):
        out = {}
        for item in raw:
            if not isinstance(item, dict):
                continue
            head = item.get("word") or item.get("headword")
            if not head or not isinstance(head, str):
                continue
            record = {k: v for k, v in item.items() if k not in ("word", "headword")}
            out[head] = record
        return out
    raise ValueError(f"{path}: expected an object or list at top level")


def split_into_shards(entries: dict[str, Any] | Iterable[tuple[str, Any]]) -> dict[str, dict[str, Any]]:
    """Group {word: record} by shard key. Words are normalized; the first duplicate wins."""
    items = entries.items() if isinstance(entries, dict) else entries
    shards: dict[str, dict[str, Any]] = {}
    for word, record in items:
        key = normalize(word)
        if not key:
            continue
        shard = shards.setdefault(shard_key_for(key), {})
        if key in shard:
            logger.warning("duplicate headword %r, keeping the first", key)
            continue
        shard[key] = record
    return shards


def write_shards(shards: dict[str, dict[str, Any]], out_dir: Path, suffix: str = ".json") -> list[Path]:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for key in SHARD_KEYS:
        if key not in shards:
            continue
        path = out_dir / f"{key}{suffix}"
        path.write_text(
            json.dumps(shards[key], ensure_ascii=False, indent=1, sort_keys=True),
            encoding="utf-8",
        )
        written.append(path)
    return written


@dataclass
class ShardReport:
    key: str
    words: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {"shard": self.key, "words": self.words, "error": self.error}


def check_corpus(store: ShardStore, keys: list[str] | None = None) -> list[ShardReport]:
    """Parse every shard with a fresh index and report word counts or errors."""
    index = ShardIndex(store)
    reports = []
    for key in SHARD_KEYS if keys is None else keys:
        report = ShardReport(key)
        try:
            report.words = len(index.resolve(key))
        except CorpusParseError as e:
            report.error = e.diagnostic
        except ShardUnavailable as e:
            report.error = e.reason
        reports.append(report)
    return reports
