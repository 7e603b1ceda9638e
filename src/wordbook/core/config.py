# src/wordbook/core/config.py
"""
Settings from the environment, and logging setup.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]


def _parse_csv_env(name: str) -> list[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Settings:
    corpus_dir: Path = Path("data/corpus")
    corpus_url: str | None = None        # remote shards; wins over corpus_dir when set
    cache_size: int = 512
    corpus_size: int | None = None       # expected headword count, informational
    redis_url: str = "redis://localhost:6379/0"
    prefix: str = "wordbook"
    debounce_ms: int = 300
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


def load_settings() -> Settings:
    return Settings(
        corpus_dir=Path(os.getenv("WORDBOOK_CORPUS_DIR", "data/corpus")),
        corpus_url=os.getenv("WORDBOOK_CORPUS_URL") or None,
        cache_size=_int_env("WORDBOOK_CACHE_SIZE", 512),
        corpus_size=_int_env("WORDBOOK_CORPUS_SIZE", None),
        redis_url=os.getenv("WORDBOOK_REDIS_URL", "redis://localhost:6379/0"),
        prefix=os.getenv("WORDBOOK_PREFIX", "wordbook"),
        debounce_ms=_int_env("WORDBOOK_DEBOUNCE_MS", 300),
        log_level=os.getenv("WORDBOOK_LOG_LEVEL", "INFO").upper(),
        cors_origins=_parse_csv_env("WORDBOOK_CORS_ORIGINS") or list(DEFAULT_CORS_ORIGINS),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
