"""
Decoration - Splices phrase anchors into document text
"""
import bisect
import html
import logging
from typing import Iterable

from readnlearn.schemas.phrase import ResolvedPhrase
from readnlearn.services.ordering import sort_for_decoration

logger = logging.getLogger(__name__)


def anchor_markup(phrase_id: str, original: str, marker_length: int = 4) -> str:
    """Markup wrapping one phrase occurrence, with a short id marker."""
    safe_id = html.escape(phrase_id, quote=True)
    marker = html.escape(phrase_id[:marker_length])
    return (
        f'<span class="phrase-anchor" data-phrase-id="{safe_id}">{original}'
        f'<sup class="phrase-marker">{marker}</sup></span>'
    )


def decorate_content(
    content: str,
    resolved: Iterable[ResolvedPhrase],
    marker_length: int = 4,
) -> tuple[str, int]:
    """
    Wrap every located phrase of ``content`` in anchor markup.

    Phrases are spliced in decoration order (ordering key descending). The
    matched span of the current text is wrapped, so its casing, spacing and
    punctuation win over the saved phrase text. A phrase whose span
    overlaps one already decorated is skipped.

    Returns:
        (decorated text, number of phrases decorated)
    """
    result = content
    # Original-coordinate spans already decorated, sorted by start, with the
    # number of characters their markup added
    starts: list[int] = []
    spans: list[tuple[int, int, int]] = []

    for phrase in sort_for_decoration(resolved):
        start = max(0, phrase.position)
        end = min(len(content), start + (phrase.matched_length or len(phrase.text)))
        if end <= start:
            continue

        index = bisect.bisect_left(starts, start)
        before = spans[index - 1] if index > 0 else None
        after = spans[index] if index < len(spans) else None
        if (before and before[1] > start) or (after and after[0] < end):
            logger.debug(f"Skipping overlapping phrase {phrase.id} at {start}")
            continue

        # Markup inserted to the left shifts this span right
        shift = sum(added for _, _, added in spans[:index])
        original = content[start:end]
        markup = anchor_markup(phrase.id, original, marker_length)
        result = result[:start + shift] + markup + result[end + shift:]

        starts.insert(index, start)
        spans.insert(index, (start, end, len(markup) - len(original)))

    return result, len(spans)
