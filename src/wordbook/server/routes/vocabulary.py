"""
Vocabulary routes: /api/vocabulary
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from wordbook.core.normalize import normalize
from wordbook.core.vocabulary import VocabularyStore
from wordbook.server.deps import get_vocabulary


router = APIRouter(prefix="/api/vocabulary", tags=["vocabulary"])


class SaveWordRequest(BaseModel):
    word: str


@router.get("")
def list_words(vocabulary: VocabularyStore = Depends(get_vocabulary)):
    """List saved words, most recent first."""
    items = vocabulary.list()
    return {
        "words": [i.to_dict() for i in items],
        "warning": vocabulary.warning,
    }


@router.post("")
def save_word(req: SaveWordRequest, vocabulary: VocabularyStore = Depends(get_vocabulary)):
    item = vocabulary.add(req.word)
    return item.to_dict()


@router.get("/{word}")
def has_word(word: str, vocabulary: VocabularyStore = Depends(get_vocabulary)):
    return {"word": normalize(word), "saved": vocabulary.contains(word)}


@router.delete("/{word}")
def remove_word(word: str, vocabulary: VocabularyStore = Depends(get_vocabulary)):
    return {"word": normalize(word), "removed": vocabulary.remove(word)}
