# tests/test_vocabulary.py
"""Tests for the Redis-backed saved-word store."""

import json
import threading
from datetime import datetime, timedelta, timezone

import fakeredis
import pytest
import redis

from wordbook.core.errors import InvalidQuery, VocabularyStoreCorrupt, VocabularyStoreUnavailable
from wordbook.core.vocabulary import VocabularyItem, VocabularyStore


class TickingClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def client():
    return fakeredis.FakeRedis(server=fakeredis.FakeServer())


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(client, clock):
    return VocabularyStore(client, prefix="testvocab", clock=clock)


def test_item_round_trip():
    item = VocabularyItem("hello", datetime(2026, 1, 1, tzinfo=timezone.utc))
    assert VocabularyItem.from_dict(item.to_dict()) == item


def test_add_then_list(store):
    store.add("hello")
    assert [i.word for i in store.list()] == ["hello"]


def test_add_normalizes(store):
    item = store.add("  Hello ")
    assert item.word == "hello"
    assert store.contains("HELLO")


def test_add_twice_no_duplicate(store):
    first = store.add("hello")
    second = store.add("hello")
    items = store.list()
    assert [i.word for i in items] == ["hello"]
    assert items[0].saved_at == second.saved_at
    assert second.saved_at > first.saved_at


def test_list_most_recent_first(store):
    for w in ("alpha", "beta", "gamma"):
        store.add(w)
    store.add("alpha")
    assert [i.word for i in store.list()] == ["alpha", "gamma", "beta"]


def test_add_empty_word(store):
    with pytest.raises(InvalidQuery):
        store.add("   ")


def test_remove(store):
    store.add("hello")
    assert store.remove("Hello") is True
    assert store.contains("hello") is False


def test_remove_absent_is_noop(store):
    assert store.remove("nothing") is False
    assert store.list() == []


def test_contains_empty_word(store):
    assert store.contains("") is False


def test_writes_reach_redis(store, client):
    store.add("hello")
    raw = client.hget("testvocab:vocabulary", "hello")
    assert json.loads(raw)["word"] == "hello"
    store.remove("hello")
    assert client.hget("testvocab:vocabulary", "hello") is None


def test_survives_reload(client, clock):
    first = VocabularyStore(client, prefix="testvocab", clock=clock)
    for w in ("alpha", "beta", "gamma"):
        first.add(w)
    first.remove("beta")

    second = VocabularyStore(client, prefix="testvocab", clock=clock)
    assert second.load() == 2
    assert [i.word for i in second.list()] == ["gamma", "alpha"]
    assert {i.word for i in second.list()} == {i.word for i in first.list()}


def test_prefixes_are_isolated(client, clock):
    VocabularyStore(client, prefix="one", clock=clock).add("hello")
    assert VocabularyStore(client, prefix="two", clock=clock).list() == []


def test_clear(store, client):
    store.add("hello")
    store.clear()
    assert store.list() == []
    assert not client.exists("testvocab:vocabulary")


# === Corruption ===

def test_corrupt_json_resets_to_empty(client, clock):
    client.hset("testvocab:vocabulary", "hello", "{not json")
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    with pytest.raises(VocabularyStoreCorrupt):
        store.load()
    assert store.list() == []
    assert store.warning is not None


def test_corrupt_missing_field(client, clock):
    client.hset("testvocab:vocabulary", "hello", json.dumps({"word": "hello"}))
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    with pytest.raises(VocabularyStoreCorrupt):
        store.load()


def test_corrupt_word_mismatch(client, clock):
    client.hset("testvocab:vocabulary", "hello", json.dumps({"word": "other", "saved_at": "2026-01-01T00:00:00+00:00"}))
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    with pytest.raises(VocabularyStoreCorrupt):
        store.load()


def test_corrupt_wrong_key_type(client, clock):
    client.set("testvocab:vocabulary", "not a hash")
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    with pytest.raises(VocabularyStoreCorrupt):
        store.load()
    store.add("hello")
    assert client.type("testvocab:vocabulary") == b"hash"


def test_lazy_load_raises_once_then_works(client, clock):
    client.hset("testvocab:vocabulary", "hello", "garbage")
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    with pytest.raises(VocabularyStoreCorrupt):
        store.list()
    assert store.list() == []
    store.add("world")
    assert [i.word for i in store.list()] == ["world"]


def test_write_after_corruption_rewrites_storage(client, clock):
    client.hset("testvocab:vocabulary", "hello", "garbage")
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    with pytest.raises(VocabularyStoreCorrupt):
        store.load()
    store.add("world")

    assert client.hkeys("testvocab:vocabulary") == [b"world"]
    fresh = VocabularyStore(client, prefix="testvocab", clock=clock)
    assert fresh.load() == 1
    assert fresh.warning is None


# === Unavailable storage ===

def test_write_failure_leaves_memory_unchanged(store, client, monkeypatch):
    store.add("hello")

    def down(*args, **kwargs):
        raise redis.ConnectionError("connection refused")

    monkeypatch.setattr(client, "hset", down)
    monkeypatch.setattr(client, "hdel", down)

    with pytest.raises(VocabularyStoreUnavailable):
        store.add("world")
    with pytest.raises(VocabularyStoreUnavailable):
        store.remove("hello")
    assert [i.word for i in store.list()] == ["hello"]


def test_load_failure_is_retryable(client, clock, monkeypatch):
    store = VocabularyStore(client, prefix="testvocab", clock=clock)

    def down(*args, **kwargs):
        raise redis.ConnectionError("connection refused")

    monkeypatch.setattr(client, "hgetall", down)
    with pytest.raises(VocabularyStoreUnavailable):
        store.list()

    monkeypatch.undo()
    assert store.list() == []


# === Concurrency ===

def test_concurrent_adds_lose_nothing(client):
    store = VocabularyStore(client, prefix="testvocab")
    words = [f"word{i}" for i in range(50)]

    threads = [threading.Thread(target=store.add, args=(w,)) for w in words]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert {i.word for i in store.list()} == set(words)
    assert client.hlen("testvocab:vocabulary") == 50


def test_corrupt_non_utf8_field(client, clock):
    client.hset("testvocab:vocabulary", b"\xff\xfe", json.dumps({"word": "hello", "saved_at": "2026-01-01T00:00:00+00:00"}))
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    with pytest.raises(VocabularyStoreCorrupt):
        store.load()
    assert store.list() == []
    store.add("hello")
    assert [i.word for i in store.list()] == ["hello"]


# === Ordering ===

def test_equal_timestamps_keep_save_order_across_reload(client):
    fixed = datetime(2026, 1, 1, tzinfo=timezone.utc)
    first = VocabularyStore(client, prefix="testvocab", clock=lambda: fixed)
    for w in ("zebra", "apple", "mango"):
        first.add(w)
    before = [i.word for i in first.list()]
    assert before == ["mango", "apple", "zebra"]

    second = VocabularyStore(client, prefix="testvocab", clock=lambda: fixed)
    second.load()
    assert [i.word for i in second.list()] == before

    second.add("kiwi")
    assert second.list()[0].word == "kiwi"


def test_items_without_seq_still_load(client, clock):
    client.hset("testvocab:vocabulary", "hello", json.dumps({"word": "hello", "saved_at": "2026-01-01T00:00:00+00:00"}))
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    assert store.load() == 1
    assert store.list()[0].seq == 0


def test_corrupt_non_utf8_field_with_decoding_client(clock):
    server = fakeredis.FakeServer()
    fakeredis.FakeRedis(server=server).hset("testvocab:vocabulary", b"\xff\xfe", b"{}")
    client = fakeredis.FakeRedis(server=server, decode_responses=True)
    store = VocabularyStore(client, prefix="testvocab", clock=clock)
    with pytest.raises(VocabularyStoreCorrupt):
        store.load()
    store.add("hello")
    assert [i.word for i in store.list()] == ["hello"]
