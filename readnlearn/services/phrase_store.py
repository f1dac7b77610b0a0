"""
Phrase Store - Saved-phrase persistence consumed by the resolver
"""
import asyncio
import logging
import uuid
from datetime import datetime, timezone
from functools import partial
from typing import Callable, Optional, Protocol, TypeVar

from sqlalchemy import String, cast, delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from readnlearn.core.db import db_session
from readnlearn.core.exceptions import (
    InvalidPhraseError,
    PhraseNotFoundError,
    PhraseStoreError,
)
from readnlearn.models.phrase import SavedPhrase
from readnlearn.schemas.phrase import Phrase, PhraseCreate

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Rows fetched per requested search result before ranking
SEARCH_OVERFETCH = 5


class PhraseStore(Protocol):
    """
    What the resolver needs from storage.

    Both loads return ``[]`` when nothing matches and may raise on genuine
    I/O failure.
    """

    async def load_phrases_by_content_hash(self, content_hash: str) -> list[Phrase]:
        ...

    async def load_phrases_by_source_file(self, source_file: str) -> list[Phrase]:
        ...


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _search_rank(phrase: Phrase, query: str) -> Optional[int]:
    """Lower is better; None when the phrase does not match at all."""
    q = query.casefold()
    text = phrase.text.casefold()
    if text.startswith(q):
        return 0
    if q in text:
        return 1
    if q in phrase.translation.casefold():
        return 2
    if q in phrase.context.casefold():
        return 3
    if any(q in tag.casefold() for tag in phrase.tags):
        return 4
    return None


class SqlPhraseStore:
    """SQLAlchemy-backed phrase storage with sync execution in a worker thread"""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    async def _run(self, operation: str, func: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, func)
        except SQLAlchemyError as e:
            logger.error(f"Phrase storage operation {operation} failed: {e}")
            raise PhraseStoreError(operation, {"operation": operation, "error": str(e)}) from e

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def _select(self, *criteria) -> list[Phrase]:
        with db_session(self._session_factory) as session:
            stmt = (
                select(SavedPhrase)
                .where(*criteria)
                .order_by(SavedPhrase.added_at, SavedPhrase.id)
            )
            return [Phrase.model_validate(row) for row in session.execute(stmt).scalars()]

    async def load_phrases_by_content_hash(self, content_hash: str) -> list[Phrase]:
        """Phrases saved against a document body with this hash, oldest first"""
        return await self._run(
            "load_by_content_hash",
            partial(self._select, SavedPhrase.content_hash == content_hash),
        )

    async def load_phrases_by_source_file(self, source_file: str) -> list[Phrase]:
        """Phrases saved against a file name, oldest first"""
        return await self._run(
            "load_by_source_file",
            partial(self._select, SavedPhrase.source_file == source_file),
        )

    async def load_all_phrases(self) -> list[Phrase]:
        """Every saved phrase, newest first"""
        def _load() -> list[Phrase]:
            with db_session(self._session_factory) as session:
                stmt = select(SavedPhrase).order_by(
                    SavedPhrase.added_at.desc(), SavedPhrase.id
                )
                return [Phrase.model_validate(row) for row in session.execute(stmt).scalars()]

        return await self._run("load_all", _load)

    async def search_phrases(
        self,
        query: str,
        limit: int = 50,
        lang: Optional[str] = None,
    ) -> list[Phrase]:
        """
        Case-insensitive search over text, translation, context and tags

        Args:
            query: Search string (blank returns nothing)
            limit: Maximum number of results
            lang: Optional language filter

        Returns:
            Phrases ranked text prefix > text > translation > context > tag,
            newest first within a rank. Only the newest
            ``limit * SEARCH_OVERFETCH`` matching rows are ranked.
        """
        query = query.strip()
        if not query or limit <= 0:
            return []

        def _search() -> list[Phrase]:
            pattern = f"%{_escape_like(query)}%"
            with db_session(self._session_factory) as session:
                stmt = select(SavedPhrase).where(
                    or_(
                        SavedPhrase.text.ilike(pattern, escape="\\"),
                        SavedPhrase.translation.ilike(pattern, escape="\\"),
                        SavedPhrase.context.ilike(pattern, escape="\\"),
                        cast(SavedPhrase.tags, String).ilike(pattern, escape="\\"),
                    )
                )
                if lang:
                    stmt = stmt.where(SavedPhrase.lang == lang)
                stmt = stmt.order_by(SavedPhrase.added_at.desc(), SavedPhrase.id).limit(
                    limit * SEARCH_OVERFETCH
                )
                return [Phrase.model_validate(row) for row in session.execute(stmt).scalars()]

        candidates = await self._run("search", _search)
        ranked = []
        for order, phrase in enumerate(candidates):
            rank = _search_rank(phrase, query)
            # LIKE on serialized tags can hit JSON punctuation; rank filters those
            if rank is not None:
                ranked.append((rank, order, phrase))
        ranked.sort(key=lambda item: (item[0], item[1]))
        return [phrase for _, _, phrase in ranked[:limit]]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    async def save_phrase(self, data: PhraseCreate) -> Phrase:
        """Persist a new phrase and return it with its generated id"""
        if not data.text.strip():
            raise InvalidPhraseError(
                "Phrase text must not be blank", {"field": "text"}
            )

        def _save() -> Phrase:
            with db_session(self._session_factory) as session:
                row = SavedPhrase(
                    id=str(uuid.uuid4()),
                    added_at=datetime.now(timezone.utc),
                    **data.model_dump(),
                )
                session.add(row)
                session.flush()
                return Phrase.model_validate(row)

        phrase = await self._run("save", _save)
        logger.info(
            "Saved phrase",
            extra={"phrase_id": phrase.id, "content_hash": phrase.content_hash},
        )
        return phrase

    async def remove_phrase(self, phrase_id: str) -> None:
        """Delete a phrase; raises PhraseNotFoundError when the id is unknown"""
        def _remove() -> int:
            with db_session(self._session_factory) as session:
                result = session.execute(delete(SavedPhrase).where(SavedPhrase.id == phrase_id))
                return result.rowcount

        if not await self._run("remove", _remove):
            raise PhraseNotFoundError(phrase_id)
