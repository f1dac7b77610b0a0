"""
Phrase Resolver - Finds a document's saved phrases and orders them for display
"""
import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Optional

from readnlearn.config import ResolverSettings, get_settings
from readnlearn.schemas.phrase import ContentResolution, Phrase, ResolvedPhrase
from readnlearn.services.content_hasher import generate_content_hash
from readnlearn.services.ordering import (
    phrase_ordering_key,
    sort_for_decoration,
    sort_for_display,
)
from readnlearn.services.phrase_locator import PhraseLocator
from readnlearn.services.phrase_store import PhraseStore
from readnlearn.services.text_normalizer import TextNormalizer

logger = logging.getLogger(__name__)


class PhraseResolver:
    """
    Resolves the saved phrases of one document body.

    Holds no per-document state: every call fetches candidates and locates
    them afresh, so one resolver can serve any number of documents.
    """

    def __init__(
        self,
        store: PhraseStore,
        settings: Optional[ResolverSettings] = None,
        locator: Optional[PhraseLocator] = None,
    ):
        self.store = store
        self.settings = settings or get_settings().resolver
        self.locator = locator or PhraseLocator(
            stored_position_fallback=self.settings.stored_position_fallback
        )

    async def resolve_for_content(
        self,
        content: str,
        source_file: Optional[str] = None,
        content_hash: Optional[str] = None,
    ) -> list[ResolvedPhrase]:
        """
        Located phrases of ``content`` in display order.

        Args:
            content: Current document text
            source_file: File name the document was opened from, if any
            content_hash: Precomputed content hash (computed when omitted)

        Returns:
            Phrases found in the text, by ascending position
        """
        resolution = await self.resolve(content, source_file, content_hash)
        return resolution.display

    async def resolve(
        self,
        content: str,
        source_file: Optional[str] = None,
        content_hash: Optional[str] = None,
    ) -> ContentResolution:
        """Display order, decoration order, and the phrases that were not found."""
        content_hash = content_hash or generate_content_hash(content)
        if not content.strip():
            return ContentResolution(
                content_hash=content_hash, display=[], decoration=[], unlocated=[]
            )

        candidates = await self.fetch_candidates(content_hash, source_file)
        resolved = self.resolve_candidates(content, candidates)
        unlocated = [p for p in resolved if p.position < 0]

        logger.debug(
            "Resolved phrases for content",
            extra={
                "content_hash": content_hash,
                "source_file": source_file,
                "candidates": len(candidates),
                "unlocated": len(unlocated),
            },
        )
        return ContentResolution(
            content_hash=content_hash,
            display=sort_for_display(resolved),
            decoration=sort_for_decoration(resolved),
            unlocated=unlocated,
        )

    def resolve_candidates(
        self, content: str, candidates: Iterable[Phrase]
    ) -> list[ResolvedPhrase]:
        """Locate every candidate in ``content``; output keeps candidate order."""
        document = TextNormalizer(content)
        resolved = []
        for phrase in candidates:
            start, end = self.locator.locate_span(phrase, document)
            resolved.append(ResolvedPhrase(
                id=phrase.id,
                text=phrase.text,
                position=start,
                matched_length=max(0, end - start),
                ordering_key=phrase_ordering_key(phrase),
                translation=phrase.translation,
                tags=list(phrase.tags),
                source_file=phrase.source_file,
                content_hash=phrase.content_hash,
            ))
        return resolved

    async def fetch_candidates(
        self, content_hash: str, source_file: Optional[str] = None
    ) -> list[Phrase]:
        """
        Phrases belonging to the document.

        Content-hash matches win; the source file is consulted only when the
        hash yields nothing. The two result sets are never merged.
        """
        candidates = await self._safe_load(
            "content_hash", self.store.load_phrases_by_content_hash, content_hash
        )
        if not candidates and source_file:
            candidates = await self._safe_load(
                "source_file", self.store.load_phrases_by_source_file, source_file
            )
        return candidates

    async def _safe_load(
        self,
        key_name: str,
        loader: Callable[[str], Awaitable[list[Phrase]]],
        key: str,
    ) -> list[Phrase]:
        # No phrases is a valid state for a document, so a failed fetch is
        # reported as an empty result rather than raised to the renderer.
        try:
            return list(
                await asyncio.wait_for(loader(key), self.settings.fetch_timeout_seconds)
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Phrase fetch by {key_name} timed out after "
                f"{self.settings.fetch_timeout_seconds}s"
            )
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            logger.warning(f"Phrase fetch by {key_name} was cancelled")
        except Exception as e:
            logger.warning(f"Phrase fetch by {key_name} failed: {e}", exc_info=True)
        return []
