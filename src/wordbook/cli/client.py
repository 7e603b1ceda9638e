"""
HTTP client for the Wordbook API.
"""

import os
from urllib.parse import quote

import httpx

BASE_URL = os.getenv("WORDBOOK_API_URL", "http://localhost:8000/api")


# === Lookup ===

def lookup(word: str) -> dict:
    r = httpx.get(f"{BASE_URL}/lookup", params={"q": word})
    r.raise_for_status()
    return r.json()


def health() -> dict:
    r = httpx.get(f"{BASE_URL}/health")
    r.raise_for_status()
    return r.json()


# === Vocabulary ===

def list_vocabulary() -> dict:
    r = httpx.get(f"{BASE_URL}/vocabulary")
    r.raise_for_status()
    return r.json()


def save_word(word: str) -> dict:
    r = httpx.post(f"{BASE_URL}/vocabulary", json={"word": word})
    r.raise_for_status()
    return r.json()


def remove_word(word: str) -> dict:
    r = httpx.delete(f"{BASE_URL}/vocabulary/{quote(word, safe='')}")
    r.raise_for_status()
    return r.json()


def has_word(word: str) -> dict:
    r = httpx.get(f"{BASE_URL}/vocabulary/{quote(word, safe='')}")
    r.raise_for_status()
    return r.json()


# === Shards ===

def list_shards() -> list[dict]:
    r = httpx.get(f"{BASE_URL}/shards")
    r.raise_for_status()
    return r.json()["shards"]


def prefetch(shards: list[str] | None = None) -> dict:
    r = httpx.post(f"{BASE_URL}/shards/prefetch", json={"shards": shards}, timeout=120)
    r.raise_for_status()
    return r.json()["results"]


def invalidate(shard_key: str) -> dict:
    r = httpx.post(f"{BASE_URL}/shards/{shard_key}/invalidate")
    r.raise_for_status()
    return r.json()
