# src/wordbook/core/shard_index.py
"""
Parsed, memoized view of corpus shards.

A shard document is JSON, either keyed by word:

    {"hello": {"pronunciation": "həˈləʊ",
               "definitions": ["a greeting"],
               "examples": ["she said hello"]}}

or a list of records carrying their own word:

    [{"word": "hello", "definitions": [{"partOfSpeech": "noun", "text": "a greeting"}]}]

Each shard is parsed at most once per process, on first access.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from wordbook.core.entry import DefinitionEntry, PartOfSpeech, Sense
from wordbook.core.errors import CorpusParseError
from wordbook.core.normalize import SHARD_KEYS, is_shard_key, normalize, shard_key_for
from wordbook.core.shard_store import ShardStore


logger = logging.getLogger(__name__)


# === Parsing ===

def parse_record(word: str, record: Any) -> DefinitionEntry:
    """Build a DefinitionEntry from one record. Raises ValueError if malformed."""
    if isinstance(record, list):
        record = {"definitions": record}
    if not isinstance(record, dict):
        raise ValueError("record must be an object or a list of definitions")

    definitions = record.get("definitions", record.get("senses"))
    if not isinstance(definitions, list) or not definitions:
        raise ValueError("definitions must be a non-empty list")

    default_pos = PartOfSpeech.parse(record.get("partOfSpeech", record.get("pos")))
    senses = []
    for item in definitions:
        if isinstance(item, str):
            text, pos = item, default_pos
        elif isinstance(item, dict):
            text = item.get("text", item.get("definition"))
            tag = item.get("partOfSpeech", item.get("pos"))
            pos = PartOfSpeech.parse(tag) if tag is not None else default_pos
        else:
            raise ValueError(f"definition must be a string or object, got {type(item).__name__}")
        if not isinstance(text, str) or not text.strip():
            raise ValueError("definition text is empty")
        senses.append(Sense(pos, text.strip()))

    pronunciation = record.get("pronunciation")
    if pronunciation is not None and not isinstance(pronunciation, str):
        raise ValueError("pronunciation must be a string")

    examples = record.get("examples")
    if examples is None:
        examples = []
    elif isinstance(examples, str):
        examples = [examples]
    if not isinstance(examples, list) or not all(isinstance(e, str) for e in examples):
        raise ValueError("examples must be a list of strings")

    return DefinitionEntry(
        word=word,
        senses=tuple(senses),
        pronunciation=(pronunciation.strip() or None) if pronunciation else None,
        examples=tuple(e.strip() for e in examples if e.strip()),
    )


def _iter_records(shard_key: str, doc: Any):
    if isinstance(doc, dict):
        yield from doc.items()
    elif isinstance(doc, list):
        for i, item in enumerate(doc):
            if not isinstance(item, dict):
                raise CorpusParseError(shard_key, f"item {i} is not an object")
            word = item.get("word", item.get("headword"))
            yield word, item
    else:
        raise CorpusParseError(shard_key, f"expected an object or list, got {type(doc).__name__}")


def parse_shard(shard_key: str, raw: bytes) -> dict[str, DefinitionEntry]:
    """Parse raw shard content into {normalized word: DefinitionEntry}."""
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CorpusParseError(shard_key, f"not valid UTF-8: {e}")
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorpusParseError(shard_key, f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}")
    except (RecursionError, ValueError) as e:
        raise CorpusParseError(shard_key, f"cannot decode JSON: {e}")

    entries: dict[str, DefinitionEntry] = {}
    for word, record in _iter_records(shard_key, doc):
        if not isinstance(word, str):
            raise CorpusParseError(shard_key, f"headword must be a string, got {word!r}")
        key = normalize(word)
        if not key:
            logger.warning("shard %s: skipping blank headword", shard_key)
            continue
        if shard_key_for(key) != shard_key:
            logger.warning("shard %s: skipping %r, it belongs in shard %s", shard_key, key, shard_key_for(key))
            continue
        if key in entries:
            logger.warning("shard %s: duplicate headword %r, keeping the first", shard_key, key)
            continue
        try:
            entries[key] = parse_record(key, record)
        except ValueError as e:
            raise CorpusParseError(shard_key, f"entry {word!r}: {e}")
    return entries


# === Residency ===

class ShardState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    RESIDENT = "resident"
    FAILED = "failed"


@dataclass
class _Slot:
    lock: threading.Lock = field(default_factory=threading.Lock)
    state: ShardState = ShardState.UNLOADED
    entries: Mapping[str, DefinitionEntry] | None = None
    error: CorpusParseError | None = None


class ShardIndex:
    """Lazily parses shards from a ShardStore and keeps them resident."""

    def __init__(self, store: ShardStore):
        self.store = store
        self._slots: dict[str, _Slot] = {}
        self._lock = threading.Lock()

    def _slot(self, shard_key: str) -> _Slot:
        if not is_shard_key(shard_key):
            available = ", ".join(SHARD_KEYS)
            raise ValueError(f"Unknown shard: {shard_key}. Available: {available}")
        with self._lock:
            slot = self._slots.get(shard_key)
            if slot is None:
                slot = self._slots[shard_key] = _Slot()
            return slot

    def resolve(self, shard_key: str) -> Mapping[str, DefinitionEntry]:
        """
        Return the parsed mapping for a shard, loading it on first use.

        Raises:
            ShardUnavailable: the store could not read the shard (not remembered)
            CorpusParseError: the shard is malformed (remembered until invalidate)
        """
        slot = self._slot(shard_key)
        if slot.state is ShardState.RESIDENT:
            return slot.entries

        with slot.lock:
            if slot.state is ShardState.RESIDENT:
                return slot.entries
            if slot.state is ShardState.FAILED:
                raise slot.error

            slot.state = ShardState.LOADING
            try:
                raw = self.store.open(shard_key)
            except BaseException:
                slot.state = ShardState.UNLOADED
                raise

            try:
                entries = parse_shard(shard_key, raw)
            except CorpusParseError as e:
                logger.error("%s", e)
                slot.error = e
                slot.state = ShardState.FAILED
                raise
            except BaseException:
                slot.state = ShardState.UNLOADED
                raise

            slot.entries = MappingProxyType(entries)
            slot.state = ShardState.RESIDENT
            logger.info("loaded shard %s (%d words)", shard_key, len(entries))
            return slot.entries

    def invalidate(self, shard_key: str | None = None) -> None:
        """Forget one shard (or all). The next resolve re-reads it."""
        with self._lock:
            if shard_key is None:
                self._slots.clear()
            else:
                self._slots.pop(shard_key, None)

    def state(self, shard_key: str) -> ShardState:
        with self._lock:
            slot = self._slots.get(shard_key)
        return slot.state if slot else ShardState.UNLOADED

    def resident_keys(self) -> list[str]:
        with self._lock:
            return [k for k in SHARD_KEYS if k in self._slots and self._slots[k].state is ShardState.RESIDENT]

    def word_count(self) -> int:
        with self._lock:
            slots = list(self._slots.values())
        return sum(len(s.entries) for s in slots if s.state is ShardState.RESIDENT)
