# src/wordbook/core/vocabulary.py
"""
User-saved words, persisted in Redis.

One hash per store:
    {prefix}:vocabulary  →  {word: '{"word": "hello", "saved_at": "2026-01-01T00:00:00+00:00", "seq": 1}'}

seq counts saves and orders items whose saved_at timestamps are equal.

Every add/remove is a single Redis command issued before the in-memory
mirror changes, so an acknowledged write is already in Redis.
"""

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import redis

from wordbook.core.errors import InvalidQuery, VocabularyStoreCorrupt, VocabularyStoreUnavailable
from wordbook.core.normalize import normalize


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class VocabularyItem:
    word: str
    saved_at: datetime
    seq: int = 0  # save counter, breaks saved_at ties

    def to_dict(self) -> dict:
        return {"word": self.word, "saved_at": self.saved_at.isoformat(), "seq": self.seq}

    @classmethod
    def from_dict(cls, d: dict) -> "VocabularyItem":
        saved_at = datetime.fromisoformat(d["saved_at"])
        if saved_at.tzinfo is None:
            saved_at = saved_at.replace(tzinfo=timezone.utc)
        seq = d.get("seq", 0)
        if not isinstance(seq, int):
            raise TypeError(f"seq must be an int, got {seq!r}")
        return cls(word=d["word"], saved_at=saved_at, seq=seq)


def _text(value) -> str:
    return value.decode() if isinstance(value, bytes) else value


class VocabularyStore:
    def __init__(
        self,
        client: redis.Redis,
        prefix: str = "wordbook",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.client = client
        self.prefix = prefix
        self.clock = clock
        self.last_error: VocabularyStoreCorrupt | None = None
        # insertion order == save order, oldest first
        self._items: dict[str, VocabularyItem] | None = None
        self._seq = 0
        self._rewrite = False
        self._lock = threading.RLock()

    @property
    def key(self) -> str:
        return f"{self.prefix}:vocabulary"

    # === Loading ===

    def load(self) -> int:
        """
        Read the persisted vocabulary into memory. Returns the item count.

        Raises:
            VocabularyStoreCorrupt: stored data is unreadable; the store is now empty
            VocabularyStoreUnavailable: Redis could not be reached
        """
        with self._lock:
            try:
                raw = self.client.hgetall(self.key)
            except redis.ResponseError as e:
                self._reset_corrupt(f"{self.key} is not a hash: {e}")
            except UnicodeDecodeError as e:
                self._reset_corrupt(f"{self.key} holds bytes that are not valid UTF-8: {e}")
            except redis.RedisError as e:
                raise VocabularyStoreUnavailable(f"cannot read {self.key}: {e}") from e

            items = []
            for field, value in raw.items():
                try:
                    word = _text(field)
                except UnicodeDecodeError as e:
                    self._reset_corrupt(f"field {field!r} is not valid UTF-8: {e}")
                try:
                    item = VocabularyItem.from_dict(json.loads(_text(value)))
                except (ValueError, KeyError, TypeError, UnicodeDecodeError) as e:
                    self._reset_corrupt(f"entry {word!r} is unreadable: {e}")
                if item.word != word or normalize(item.word) != word:
                    self._reset_corrupt(f"entry {word!r} holds word {item.word!r}")
                items.append(item)

            items.sort(key=lambda i: (i.saved_at, i.seq))
            self._items = {i.word: i for i in items}
            self._seq = max((i.seq for i in items), default=0)
            self._rewrite = False
            self.last_error = None
            logger.info("loaded %d saved words from %s", len(items), self.key)
            return len(items)

    def _reset_corrupt(self, message: str):
        self._items = {}
        self._seq = 0
        self._rewrite = True
        self.last_error = VocabularyStoreCorrupt(message)
        logger.warning("vocabulary store reset to empty: %s", message)
        raise self.last_error

    def _ensure_loaded(self) -> dict[str, VocabularyItem]:
        if self._items is None:
            self.load()
        return self._items

    @property
    def warning(self) -> str | None:
        if self.last_error is None:
            return None
        return f"saved words were reset: {self.last_error}"

    # === Writes ===

    def _persist(self, upsert: VocabularyItem | None = None, delete: str | None = None) -> None:
        try:
            if self._rewrite:
                merged = {w: i for w, i in self._items.items() if w != delete}
                if upsert:
                    merged[upsert.word] = upsert
                pipe = self.client.pipeline(transaction=True)
                pipe.delete(self.key)
                if merged:
                    pipe.hset(self.key, mapping={w: json.dumps(i.to_dict()) for w, i in merged.items()})
                pipe.execute()
                self._rewrite = False
            elif upsert:
                self.client.hset(self.key, upsert.word, json.dumps(upsert.to_dict()))
            elif delete:
                self.client.hdel(self.key, delete)
        except redis.RedisError as e:
            raise VocabularyStoreUnavailable(f"cannot write {self.key}: {e}") from e

    def add(self, word: str) -> VocabularyItem:
        """Save a word. Saving it again refreshes saved_at."""
        w = normalize(word)
        if not w:
            raise InvalidQuery("cannot save an empty word")
        with self._lock:
            items = self._ensure_loaded()
            item = VocabularyItem(w, self.clock(), self._seq + 1)
            self._persist(upsert=item)
            self._seq = item.seq
            items.pop(w, None)
            items[w] = item
            return item

    def remove(self, word: str) -> bool:
        """Forget a word. Returns False if it was not saved."""
        w = normalize(word)
        if not w:
            raise InvalidQuery("cannot remove an empty word")
        with self._lock:
            items = self._ensure_loaded()
            if w not in items:
                return False
            self._persist(delete=w)
            del items[w]
            return True

    def clear(self) -> None:
        with self._lock:
            try:
                self.client.delete(self.key)
            except redis.RedisError as e:
                raise VocabularyStoreUnavailable(f"cannot clear {self.key}: {e}") from e
            self._items = {}
            self._seq = 0
            self._rewrite = False
            self.last_error = None

    # === Reads ===

    def list(self) -> list[VocabularyItem]:
        """Saved words, most recently saved first."""
        with self._lock:
            return list(reversed(self._ensure_loaded().values()))

    def contains(self, word: str) -> bool:
        w = normalize(word)
        if not w:
            return False
        with self._lock:
            return w in self._ensure_loaded()

    def __len__(self) -> int:
        with self._lock:
            return len(self._ensure_loaded())
