"""
Phrase API endpoints - Saving, removing and searching saved phrases
"""
from fastapi import APIRouter, Depends, Query, status

from readnlearn.core.dependencies import get_phrase_store
from readnlearn.schemas.base import Envelope, Message
from readnlearn.schemas.phrase import Phrase, PhraseCreate, PhraseSearchResponse
from readnlearn.services.phrase_store import SqlPhraseStore

router = APIRouter(prefix="/phrases", tags=["phrases"])


@router.post(
    "",
    response_model=Envelope[Phrase],
    status_code=status.HTTP_201_CREATED,
)
async def save_phrase(
    phrase: PhraseCreate,
    store: SqlPhraseStore = Depends(get_phrase_store),
):
    """
    Save a phrase selected in a document

    - **text**: Selected text
    - **context**: Surrounding sentence, used to disambiguate short phrases
    - **line_no** / **col_offset**: Position at save time (1-based line, 0-based column)
    - **content_hash** / **source_file**: Which document the phrase belongs to
    """
    saved = await store.save_phrase(phrase)
    return Envelope(status="ok", data=saved)


@router.delete("/{phrase_id}", response_model=Envelope[Message])
async def remove_phrase(
    phrase_id: str,
    store: SqlPhraseStore = Depends(get_phrase_store),
):
    await store.remove_phrase(phrase_id)
    return Envelope(status="ok", data=Message(message=f"Phrase {phrase_id} removed"))


@router.get("/search", response_model=Envelope[PhraseSearchResponse])
async def search_phrases(
    q: str,
    limit: int = Query(default=50, ge=1, le=500),
    lang: str | None = None,
    store: SqlPhraseStore = Depends(get_phrase_store),
):
    """
    Search saved phrases by text, translation, context or tag
    """
    results = await store.search_phrases(q, limit=limit, lang=lang)
    return Envelope(status="ok", data=PhraseSearchResponse(query=q, results=results))
