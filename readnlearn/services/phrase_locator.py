"""
Phrase Locator - Re-anchors a saved phrase inside the current document text

Strategies run in a fixed order and the first one that finds the phrase
wins; there is no scoring across strategies:

1. stored line/column, verified against the text at that offset
2. saved context sentence, then the phrase inside that window
3. exact substring
4. case-insensitive substring
5. whitespace-normalized substring
6. markup-stripped substring
7. whitespace-tolerant, case-insensitive regex on the raw text
8. stored line/column without verification (opt-in, see ``stored_position_fallback``)

-1 means "not in this text" and is a normal result, not an error.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Union

from readnlearn.schemas.phrase import Phrase
from readnlearn.services.text_normalizer import (
    NormalizedText,
    TextNormalizer,
    normalize_whitespace,
    strip_markup,
)

logger = logging.getLogger(__name__)

NOT_FOUND = -1

# (start, end) in the current text; end is exclusive
Span = tuple[int, int]
NO_SPAN: Span = (NOT_FOUND, NOT_FOUND)


def find_ignore_case(haystack: str, needle: str, start: int = 0) -> int:
    """Case-insensitive ``str.find`` whose offsets always index ``haystack``.

    ``str.lower`` can change string length (e.g. U+0130), which would skew
    offsets; regex IGNORECASE compares character by character.
    """
    if not needle:
        return NOT_FOUND
    match = re.compile(re.escape(needle), re.IGNORECASE).search(haystack, start)
    return match.start() if match else NOT_FOUND


def stored_offset(phrase: Phrase, text: str) -> Optional[int]:
    """
    Offset implied by the phrase's saved line/column in ``text``.

    Returns None when no line is stored, when the text no longer has that
    many lines, or when the offset falls outside the text.
    """
    if phrase.line_no is None or phrase.line_no <= 0:
        return None
    lines = text.split("\n")
    if phrase.line_no > len(lines):
        return None
    line_index = phrase.line_no - 1
    offset = sum(len(line) + 1 for line in lines[:line_index]) + (phrase.col_offset or 0)
    if offset < 0 or offset >= len(text):
        return None
    return offset


def fuzzy_pattern(phrase_text: str) -> Optional[re.Pattern[str]]:
    """Regex matching ``phrase_text`` with any whitespace run made flexible."""
    words = phrase_text.split()
    if not words:
        return None
    return re.compile(r"\s+".join(re.escape(word) for word in words), re.IGNORECASE)


def _projection_span(projection: NormalizedText, index: int, length: int) -> Span:
    """Original-text span of ``length`` normalized characters starting at ``index``."""
    start = projection.map_to_original(index)
    if start < 0:
        return NO_SPAN
    last = projection.map_to_original(index + length - 1)
    if last < start:
        return start, start + length
    return start, last + 1


def _search_projection(projection: NormalizedText, needle: str) -> Span:
    index = find_ignore_case(projection.normalized, needle)
    if index < 0:
        return NO_SPAN
    return _projection_span(projection, index, len(needle))


Document = Union[str, TextNormalizer]
Strategy = Callable[[Phrase, TextNormalizer], Span]


class PhraseLocator:
    """Finds the character offset of a saved phrase in a document."""

    def __init__(self, stored_position_fallback: bool = False):
        self.stored_position_fallback = stored_position_fallback
        self._strategies: tuple[tuple[str, Strategy], ...] = (
            ("stored_position", self._by_stored_position),
            ("context", self._by_context),
            ("exact", self._by_exact),
            ("case_insensitive", self._by_case_insensitive),
            ("normalized_whitespace", self._by_normalized_whitespace),
            ("markup_stripped", self._by_markup_stripped),
            ("fuzzy_regex", self._by_fuzzy_regex),
        )

    def locate(self, phrase: Phrase, text: Document) -> int:
        """
        Locate ``phrase`` in ``text``.

        Args:
            phrase: Saved phrase (text, optional context and line/column)
            text: Document body, or a ``TextNormalizer`` already built for it
                when many phrases are located in the same document

        Returns:
            Offset into the document text, or -1
        """
        return self.locate_span(phrase, text)[0]

    def locate_span(self, phrase: Phrase, text: Document) -> Span:
        """
        Span of the text that matched ``phrase``, or ``(-1, -1)``.

        The span can differ in length from the phrase text when the match
        came through whitespace, markup or fuzzy matching.
        """
        document = text if isinstance(text, TextNormalizer) else TextNormalizer(text)
        if not document.text or not phrase.text.strip():
            return NO_SPAN

        for name, strategy in self._strategies:
            span = strategy(phrase, document)
            if span[0] >= 0:
                logger.debug(
                    "Located phrase %s at %d via %s", phrase.id, span[0], name
                )
                return span

        if self.stored_position_fallback:
            position = stored_offset(phrase, document.text)
            if position is not None:
                logger.debug(
                    "Using unverified stored position %d for phrase %s",
                    position, phrase.id,
                )
                return position, min(len(document.text), position + len(phrase.text))

        return NO_SPAN

    __call__ = locate

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------
    def _by_stored_position(self, phrase: Phrase, document: TextNormalizer) -> Span:
        offset = stored_offset(phrase, document.text)
        if offset is None:
            return NO_SPAN
        end = offset + len(phrase.text)
        candidate = document.text[offset:end]
        if candidate == phrase.text:
            return offset, end
        # A case-only match must not shadow a verbatim occurrence elsewhere
        if (
            len(candidate) == len(phrase.text)
            and find_ignore_case(candidate, phrase.text) == 0
            and phrase.text not in document.text
        ):
            return offset, end
        return NO_SPAN

    def _by_context(self, phrase: Phrase, document: TextNormalizer) -> Span:
        context = normalize_whitespace(phrase.context)
        needle = normalize_whitespace(phrase.text)
        if not context or not needle:
            return NO_SPAN
        projection = document.whitespace
        context_start = find_ignore_case(projection.normalized, context)
        if context_start < 0:
            return NO_SPAN

        window_start = projection.map_to_original(context_start)
        window_last = projection.map_to_original(context_start + len(context) - 1)
        if window_start >= 0 and window_last >= window_start:
            in_window = document.text.find(phrase.text, window_start, window_last + 1)
            if in_window >= 0:
                return in_window, in_window + len(phrase.text)
        if phrase.text in document.text:
            return NO_SPAN

        window = projection.normalized[context_start:context_start + len(context)]
        in_window = find_ignore_case(window, needle)
        if in_window < 0:
            return NO_SPAN
        return _projection_span(projection, context_start + in_window, len(needle))

    def _by_exact(self, phrase: Phrase, document: TextNormalizer) -> Span:
        start = document.text.find(phrase.text)
        if start < 0:
            return NO_SPAN
        return start, start + len(phrase.text)

    def _by_case_insensitive(self, phrase: Phrase, document: TextNormalizer) -> Span:
        start = find_ignore_case(document.text, phrase.text)
        if start < 0:
            return NO_SPAN
        return start, start + len(phrase.text)

    def _by_normalized_whitespace(self, phrase: Phrase, document: TextNormalizer) -> Span:
        return _search_projection(document.whitespace, normalize_whitespace(phrase.text))

    def _by_markup_stripped(self, phrase: Phrase, document: TextNormalizer) -> Span:
        needle = normalize_whitespace(strip_markup(phrase.text))
        return _search_projection(document.markup, needle)

    def _by_fuzzy_regex(self, phrase: Phrase, document: TextNormalizer) -> Span:
        pattern = fuzzy_pattern(phrase.text)
        if pattern is None:
            return NO_SPAN
        match = pattern.search(document.text)
        return match.span() if match else NO_SPAN


def locate_phrase(phrase: Phrase, text: str, stored_position_fallback: bool = False) -> int:
    """Functional shortcut for one-off lookups."""
    return PhraseLocator(stored_position_fallback).locate(phrase, text)
