"""
Lookup routes: /api/lookup, /api/health
"""

from fastapi import APIRouter, Depends, Query

from wordbook.core.config import Settings
from wordbook.core.dictionary import DictionaryService
from wordbook.core.errors import VocabularyStoreCorrupt, VocabularyStoreUnavailable
from wordbook.core.vocabulary import VocabularyStore
from wordbook.server.deps import get_dictionary, get_settings, get_vocabulary


router = APIRouter(prefix="/api", tags=["lookup"])


@router.get("/lookup")
def lookup_word(
    q: str = Query(..., description="Word to look up"),
    dictionary: DictionaryService = Depends(get_dictionary),
    vocabulary: VocabularyStore = Depends(get_vocabulary),
):
    """Look up a word. Missing or unreadable shards come back as status 'unavailable'."""
    result = dictionary.lookup(q)
    try:
        saved = vocabulary.contains(result.word)
    except (VocabularyStoreCorrupt, VocabularyStoreUnavailable):
        saved = None
    return {**result.to_dict(), "saved": saved}


@router.get("/health")
def health(
    settings: Settings = Depends(get_settings),
    dictionary: DictionaryService = Depends(get_dictionary),
    vocabulary: VocabularyStore = Depends(get_vocabulary),
):
    return {
        "ok": True,
        "corpus": repr(dictionary.index.store),
        "corpus_size": settings.corpus_size,
        **dictionary.stats(),
        "vocabulary_warning": vocabulary.warning,
    }
