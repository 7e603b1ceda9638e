# src/wordbook/core/entry.py
"""
Dictionary data model.

A headword maps to one DefinitionEntry with one or more senses.
"bank" → [Sense(noun, "financial institution"), Sense(noun, "river edge")]
"""

from dataclasses import dataclass
from enum import Enum


class PartOfSpeech(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PRONOUN = "pronoun"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"
    DETERMINER = "determiner"
    NUMERAL = "numeral"
    ABBREVIATION = "abbreviation"
    PHRASE = "phrase"
    OTHER = "other"

    @classmethod
    def parse(cls, tag) -> "PartOfSpeech":
        """Map a free-form tag ("n.", "Adj", "verb") to a PartOfSpeech."""
        if not isinstance(tag, str):
            return cls.OTHER
        key = tag.strip().lower().rstrip(".")
        if not key:
            return cls.OTHER
        try:
            return cls(key)
        except ValueError:
            return _POS_ALIASES.get(key, cls.OTHER)


_POS_ALIASES = {
    "n": PartOfSpeech.NOUN,
    "v": PartOfSpeech.VERB,
    "vt": PartOfSpeech.VERB,
    "vi": PartOfSpeech.VERB,
    "adj": PartOfSpeech.ADJECTIVE,
    "a": PartOfSpeech.ADJECTIVE,
    "adv": PartOfSpeech.ADVERB,
    "pron": PartOfSpeech.PRONOUN,
    "prep": PartOfSpeech.PREPOSITION,
    "conj": PartOfSpeech.CONJUNCTION,
    "interj": PartOfSpeech.INTERJECTION,
    "int": PartOfSpeech.INTERJECTION,
    "det": PartOfSpeech.DETERMINER,
    "num": PartOfSpeech.NUMERAL,
    "abbr": PartOfSpeech.ABBREVIATION,
}


@dataclass(frozen=True)
class Sense:
    part_of_speech: PartOfSpeech  # PartOfSpeech.NOUN
    text: str                     # "a greeting"

    def to_dict(self) -> dict:
        return {"partOfSpeech": self.part_of_speech.value, "text": self.text}


@dataclass(frozen=True)
class DefinitionEntry:
    word: str
    senses: tuple[Sense, ...]
    pronunciation: str | None = None
    examples: tuple[str, ...] = ()

    @property
    def definitions(self) -> list[str]:
        return [s.text for s in self.senses]

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "pronunciation": self.pronunciation,
            "senses": [s.to_dict() for s in self.senses],
            "examples": list(self.examples),
        }


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a dictionary lookup. Only FOUND carries an entry."""

    word: str
    status: LookupStatus
    shard_key: str
    entry: DefinitionEntry | None = None
    reason: str | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @classmethod
    def hit(cls, word: str, shard_key: str, entry: DefinitionEntry) -> "LookupResult":
        return cls(word, LookupStatus.FOUND, shard_key, entry=entry)

    @classmethod
    def not_found(cls, word: str, shard_key: str) -> "LookupResult":
        return cls(word, LookupStatus.NOT_FOUND, shard_key)

    @classmethod
    def unavailable(cls, word: str, shard_key: str, reason: str) -> "LookupResult":
        return cls(word, LookupStatus.UNAVAILABLE, shard_key, reason=reason)

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "status": self.status.value,
            "shard": self.shard_key,
            "entry": self.entry.to_dict() if self.entry else None,
            "reason": self.reason,
        }
